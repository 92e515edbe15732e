"""
Capture module - Microphone capture abstraction and session lifecycle.
"""

from .audio_input import AudioInputDevice, AudioInputStream
from .base import CaptureDevice, CaptureStream
from .session import CaptureSession

__all__ = [
    "AudioInputDevice",
    "AudioInputStream",
    "CaptureDevice",
    "CaptureSession",
    "CaptureStream",
]
