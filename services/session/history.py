"""Linear undo/redo history of room images."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from models.image_ref import HistoryEntry, ImageRef

LOGGER = logging.getLogger(__name__)


class HistoryNavigator:
    """Ordered list of image states plus the index of the one shown.

    The navigator never raises for navigation: undo at the first entry and
    redo at the last entry are no-ops that return False. Every method that
    changes the active image returns True so the caller can reset its pending
    edit state.
    """

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []
        self._index = -1

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def current(self) -> Optional[HistoryEntry]:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def current_image(self) -> Optional[ImageRef]:
        entry = self.current
        return entry.image if entry else None

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    @property
    def is_editing(self) -> bool:
        """True once the shown image is a generated design rather than the upload."""
        return self._index > 0

    def __len__(self) -> int:
        return len(self._entries)

    def entry_at(self, index: int) -> HistoryEntry:
        """Return the entry at `index` or raise IndexError."""
        if index < 0 or index >= len(self._entries):
            raise IndexError(f"History index {index} out of range")
        return self._entries[index]

    def record_new_root(self, image: ImageRef) -> bool:
        """Replace the whole history with a single uploaded image."""
        self._entries = [HistoryEntry(image=image, origin="upload")]
        self._index = 0
        LOGGER.debug("History reset to new root %s", image.ref_id)
        return True

    def select_for_further_editing(self, image: ImageRef) -> bool:
        """Drop any redo branch and append `image` as the new current entry."""
        del self._entries[self._index + 1 :]
        self._entries.append(HistoryEntry(image=image, origin="generated"))
        self._index = len(self._entries) - 1
        LOGGER.debug("History advanced to index %d", self._index)
        return True

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self._index -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self._index += 1
        return True
