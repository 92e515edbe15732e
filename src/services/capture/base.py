"""
Abstract base classes for microphone capture devices.

The recording hardware is an external capability: a device grants (or
refuses) access and hands back a stream, which buffers audio until it is
finalized and then releases its tracks. Implementations wrap whatever the
host offers (browser recorder widget, sound card, test fakes).
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

ChunkCallback = Callable[[bytes], None]


class CaptureStream(ABC):
    """A live audio stream acquired from a CaptureDevice."""

    @property
    @abstractmethod
    def active(self) -> bool:
        """True while the device tracks are held (hardware recording light on)."""

    @abstractmethod
    def begin(self, on_chunk: ChunkCallback) -> None:
        """Start buffering; each captured chunk is delivered through ``on_chunk``."""

    @abstractmethod
    def finalize(self) -> None:
        """Flush any pending audio through ``on_chunk`` and stop buffering.

        Returns only after the final chunk has been delivered.
        """

    @abstractmethod
    def release(self) -> None:
        """Stop every underlying device track. Safe to call more than once."""


class CaptureDevice(ABC):
    """Interface that every microphone provider must implement."""

    @abstractmethod
    def request_access(self) -> CaptureStream:
        """Ask for microphone access.

        Returns:
            A live stream, not yet buffering.

        Raises:
            PermissionDenied: If the user or the platform refuses access.
        """
