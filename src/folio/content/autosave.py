"""Debounced autosave of the working content document.

Rapid edits are coalesced: every ``schedule`` call replaces the pending
snapshot and re-arms a single timer on the asyncio event loop, so only
the last document scheduled before an idle interval is written.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from folio.content.models import ContentDocument
from folio.shared.errors import StorageWriteError

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0


class AutosaveController:
    """Owns one cancellable timer and the most recently scheduled snapshot.

    Args:
        write: Persists a document; may raise StorageWriteError.
        interval: Idle seconds between the last ``schedule`` and the write.
        loop: Event loop for the timer.  Defaults to the running loop at
            schedule time; without one, writes wait for ``flush``.
        on_error: Called with the error when a write fails.
    """

    def __init__(
        self,
        write: Callable[[ContentDocument], None],
        *,
        interval: float = DEFAULT_INTERVAL,
        loop: asyncio.AbstractEventLoop | None = None,
        on_error: Callable[[StorageWriteError], None] | None = None,
    ) -> None:
        self._write = write
        self.interval = interval
        self._loop = loop
        self._on_error = on_error
        self._handle: asyncio.TimerHandle | None = None
        self._snapshot: ContentDocument | None = None
        self.writes = 0
        self.last_error: StorageWriteError | None = None

    @property
    def pending(self) -> bool:
        return self._snapshot is not None

    @property
    def armed(self) -> bool:
        return self._handle is not None

    def schedule(self, document: ContentDocument) -> None:
        """Supersede any pending write with a snapshot of *document*."""
        self._snapshot = document.model_copy(deep=True)
        self._cancel_timer()
        loop = self._resolve_loop()
        if loop is None:
            logger.debug("No event loop; autosave deferred until flush")
            return
        self._handle = loop.call_later(self.interval, self._fire)

    def flush(self) -> bool:
        """Write the pending snapshot now; returns whether anything was written."""
        self._cancel_timer()
        return self._write_pending()

    def cancel(self) -> None:
        """Drop the pending snapshot without writing it."""
        self._cancel_timer()
        if self._snapshot is not None:
            logger.debug("Discarding pending autosave")
        self._snapshot = None

    # ── Private helpers ──────────────────────────────────────────

    def _resolve_loop(self) -> asyncio.AbstractEventLoop | None:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            return None

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._write_pending()

    def _write_pending(self) -> bool:
        snapshot, self._snapshot = self._snapshot, None
        if snapshot is None:
            return False
        try:
            self._write(snapshot)
        except StorageWriteError as exc:
            logger.warning("Autosave failed: %s", exc)
            self.last_error = exc
            if self._on_error is not None:
                self._on_error(exc)
            return False
        self.writes += 1
        self.last_error = None
        return True
