"""JSON-backed content document store.

One JSON file per identity key under a base directory, named by the
percent-encoded key.  Reads fail soft (anything unreadable is treated as
"no prior data"), writes are atomic and always emit the full document
shape.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from urllib.parse import quote, unquote

from pydantic import ValidationError

from folio.content.models import ContentDocument
from folio.shared.errors import StorageWriteError

logger = logging.getLogger(__name__)

KEY_PREFIX = "profile"
ANONYMOUS_KEY = f"{KEY_PREFIX}:anonymous"
FILE_SUFFIX = ".json"


def storage_key(address: str | None) -> str:
    """Return the store key for an identity, or the anonymous key."""
    if address and address.strip():
        return f"{KEY_PREFIX}:{address.strip()}"
    return ANONYMOUS_KEY


class ContentStore:
    """Keyed persistence of ContentDocuments, last write wins."""

    def __init__(self, base_dir: Path) -> None:
        self._dir = Path(base_dir)

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, key: str) -> Path:
        """File for *key*; the key is percent-encoded so distinct keys never share a file."""
        return self._dir / (quote(key, safe="") + FILE_SUFFIX)

    def save(self, key: str, document: ContentDocument) -> None:
        """Persist *document* under *key*, replacing any previous one.

        Raises StorageWriteError if the file cannot be written.
        """
        path = self.path_for(key)
        payload = document.model_dump_json(by_alias=True, indent=2)
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".tmp-", suffix=FILE_SUFFIX)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StorageWriteError(key, str(exc)) from exc
        logger.debug("Saved %s to %s", key, path)

    def load(self, key: str) -> ContentDocument | None:
        """Return the document stored under *key*, or None.

        Missing, unreadable and corrupt entries all return None.
        """
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return ContentDocument.model_validate(raw)
        except OSError as exc:
            logger.warning("Could not read content store at %s: %s", path, exc)
            return None
        except (json.JSONDecodeError, ValidationError, ValueError):
            logger.warning("Corrupt content store at %s, treating as empty", path)
            return None

    def delete(self, key: str) -> bool:
        """Remove the document under *key*; returns whether one existed."""
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageWriteError(key, str(exc)) from exc
        return True

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def keys(self) -> list[str]:
        """Keys of all stored documents, sorted."""
        if not self._dir.is_dir():
            return []
        return sorted(
            unquote(p.stem) for p in self._dir.glob(f"*{FILE_SUFFIX}") if not p.name.startswith(".")
        )
