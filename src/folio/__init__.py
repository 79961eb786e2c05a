"""folio: media URL resolution and local content persistence for profile pages."""

__version__ = "0.1.0"
