from __future__ import annotations

import threading
from typing import List, Optional

from drumkitz.audio import PcmAudio
from drumkitz.detection import DEFAULT_THRESHOLD, DetectionParams, HitSegment, detect_hits
from drumkitz.utils import get_logger

logger = get_logger(__name__)


class DetectionSession:
    """Holds one decoded buffer and the hits for its latest threshold.

    Detection runs again whenever the threshold changes. When detections run
    off the caller's thread, ``request`` hands out a token and ``complete``
    publishes a result only if no newer request has been issued since.
    """

    def __init__(
        self,
        audio: PcmAudio,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        params: Optional[DetectionParams] = None,
    ) -> None:
        self.audio = audio
        self.params = params or DetectionParams()
        self.threshold = threshold
        self.segments: List[HitSegment] = []
        self._latest_token = 0
        self._lock = threading.Lock()

    def request(self, threshold: float) -> int:
        with self._lock:
            self._latest_token += 1
            self.threshold = threshold
            return self._latest_token

    def complete(self, token: int, segments: List[HitSegment]) -> bool:
        with self._lock:
            if token != self._latest_token:
                logger.debug(
                    "Dropping stale detection",
                    extra={"token": token, "latest": self._latest_token},
                )
                return False
            self.segments = list(segments)
            return True

    def run(self, token: int, threshold: float) -> bool:
        return self.complete(token, detect_hits(self.audio, threshold, self.params))

    def detect(self, threshold: float) -> List[HitSegment]:
        token = self.request(threshold)
        self.run(token, threshold)
        return list(self.segments)
