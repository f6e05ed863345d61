from .slicer import clamp_segment, slice_audio
from .wav import encode_pcm_audio, encode_wav

__all__ = ["clamp_segment", "slice_audio", "encode_pcm_audio", "encode_wav"]
