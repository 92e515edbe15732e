"""Preview handle registry.

A preview handle is a short opaque id standing for a media asset's displayable
form (the browser analogue is an object URL). Each handle must be released
exactly once, either when its asset is replaced or on a full reset.
"""

import logging
import uuid

logger = logging.getLogger(__name__)


class PreviewRegistry:
    """Issues preview handles and tracks which ones are still live."""

    def __init__(self) -> None:
        self._live: dict[str, bytes] = {}
        self.allocated = 0
        self.released = 0

    def allocate(self, content: bytes) -> str:
        handle = f"preview:{uuid.uuid4().hex}"
        self._live[handle] = content
        self.allocated += 1
        return handle

    def resolve(self, handle: str) -> bytes | None:
        """Return the bytes behind a live handle, or None if it was released."""
        return self._live.get(handle)

    def release(self, handle: str) -> bool:
        """Free a handle. Returns False (and logs) for unknown or already-freed handles."""
        if self._live.pop(handle, None) is None:
            logger.warning("Preview handle %s released twice or never allocated", handle)
            return False
        self.released += 1
        return True

    @property
    def live_count(self) -> int:
        return len(self._live)
