from .pcm import PcmAudio

__all__ = ["PcmAudio"]
