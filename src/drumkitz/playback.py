from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Protocol

from drumkitz.detection import HitSegment
from drumkitz.utils import get_logger

logger = get_logger(__name__)


class PlaybackState(str, Enum):
    IDLE = "idle"
    STOPPING = "stopping"
    STARTING = "starting"
    PLAYING = "playing"


class AudioEngine(Protocol):
    def play(
        self, start_s: float, end_s: Optional[float], on_finished: Callable[[], None]
    ) -> None:
        ...

    def stop(self, on_stopped: Callable[[], None]) -> None:
        ...


@dataclass
class _PlayRequest:
    start_s: float
    end_s: Optional[float]
    segment_index: Optional[int] = None


class PlaybackController:
    """Serializes play requests against an engine with asynchronous stop.

    A request made while audio is playing first stops the engine and only
    starts the new range once the engine reports the stop finished. Requests
    arriving while stopping replace the pending one.
    """

    def __init__(self, engine: AudioEngine) -> None:
        self.engine = engine
        self.state = PlaybackState.IDLE
        self.selected_index: Optional[int] = None
        self._pending: Optional[_PlayRequest] = None
        self._generation = 0
        self._lock = threading.RLock()

    def play_segment(self, index: int, segment: HitSegment) -> None:
        self._request(_PlayRequest(segment.start, segment.end, index))

    def play_all(self) -> None:
        self._request(_PlayRequest(0.0, None))

    def restart(self) -> None:
        self.play_all()

    def toggle(self) -> None:
        with self._lock:
            active = self.state in (PlaybackState.STARTING, PlaybackState.PLAYING)
        if active:
            self.stop()
        else:
            self.play_all()

    def stop(self) -> None:
        with self._lock:
            self._pending = None
            if self.state in (PlaybackState.STARTING, PlaybackState.PLAYING):
                self._begin_stop()

    def _request(self, request: _PlayRequest) -> None:
        with self._lock:
            self._pending = request
            if self.state == PlaybackState.IDLE:
                self._start_pending()
            elif self.state != PlaybackState.STOPPING:
                self._begin_stop()

    def _begin_stop(self) -> None:
        self.state = PlaybackState.STOPPING
        self.selected_index = None
        self._generation += 1
        self.engine.stop(self._on_stopped)

    def _on_stopped(self) -> None:
        with self._lock:
            if self.state != PlaybackState.STOPPING:
                return
            self.state = PlaybackState.IDLE
            if self._pending is not None:
                self._start_pending()

    def _start_pending(self) -> None:
        request = self._pending
        self._pending = None
        if request is None:
            return
        self.state = PlaybackState.STARTING
        self.selected_index = request.segment_index
        self._generation += 1
        generation = self._generation
        logger.debug(
            "Starting playback",
            extra={"start_s": request.start_s, "end_s": request.end_s, "segment": request.segment_index},
        )
        self.engine.play(
            request.start_s, request.end_s, lambda: self._on_finished(generation)
        )
        if self.state == PlaybackState.STARTING and self._generation == generation:
            self.state = PlaybackState.PLAYING

    def _on_finished(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.state = PlaybackState.IDLE
            self.selected_index = None
