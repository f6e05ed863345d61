from __future__ import annotations


class DrumkitzError(Exception):
    """Base class for errors raised by the audio collaborators."""


class DecodeError(DrumkitzError):
    """Audio bytes could not be decoded into PCM samples."""


class SliceRangeError(DrumkitzError, ValueError):
    """A slice range falls outside the audio buffer."""
