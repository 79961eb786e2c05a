"""Cross-cutting helpers shared by the media and content domains."""
