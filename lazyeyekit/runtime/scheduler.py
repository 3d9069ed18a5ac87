from __future__ import annotations
import asyncio, logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Awaitable, Callable, Optional
from ..eye.contours import LandmarkFrame
from ..pipeline import LandmarkSource, TrackingPipeline
from .events import EyeData

logger = logging.getLogger(__name__)

AsyncDetector = Callable[[Any], Awaitable[Optional[LandmarkFrame]]]


class ThreadedDetector:
    """
    Runs a blocking landmark source on one worker thread.

    A timed-out await does not stop the thread, so `busy` stays true until
    the source call has actually returned.
    """
    def __init__(self, source: LandmarkSource):
        self.source = source
        self.pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="landmarks")
        self.pending: Optional[Future] = None

    @property
    def busy(self) -> bool:
        return self.pending is not None and not self.pending.done()

    async def __call__(self, frame) -> Optional[LandmarkFrame]:
        self.pending = self.pool.submit(self.source, frame)
        return await asyncio.wrap_future(self.pending)

    def close(self):
        self.pool.shutdown(wait=False)


def threaded(source: LandmarkSource) -> ThreadedDetector:
    """Wrap a blocking landmark source so it runs off the event loop."""
    return ThreadedDetector(source)


class FrameScheduler:
    """
    Feeds camera frames to the pipeline, one detection in flight at a time.

    A frame that arrives while the previous one is still being detected is
    dropped, not queued. Detections that time out or raise count as a miss;
    after a timeout, frames keep being dropped until the detector is free.
    """
    def __init__(self, detect: AsyncDetector, pipeline: TrackingPipeline, timeout_s: float = 0.1,
                 on_eye: Optional[Callable[[Optional[EyeData]], None]] = None):
        self.detect = detect
        self.pipeline = pipeline
        self.timeout_s = timeout_s
        self.on_eye = on_eye
        self.dropped = 0
        self.timeouts = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def busy(self) -> bool:
        if self._task is not None and not self._task.done():
            return True
        return bool(getattr(self.detect, "busy", False))

    def submit(self, frame, t: Optional[float] = None) -> Optional[asyncio.Task]:
        """Start detection on `frame` unless one is already running. Needs a running loop."""
        if self.busy:
            self.dropped += 1
            return None
        self._task = asyncio.get_running_loop().create_task(self._run(frame, t))
        return self._task

    async def _run(self, frame, t) -> Optional[EyeData]:
        try:
            lm = await asyncio.wait_for(self.detect(frame), self.timeout_s)
        except asyncio.TimeoutError:
            self.timeouts += 1
            logger.debug("landmark detection timed out after %.3fs", self.timeout_s)
            lm = None
        except Exception:
            logger.debug("landmark detection failed", exc_info=True)
            lm = None
        eye = self.pipeline.tick(lm, t)
        if self.on_eye is not None:
            self.on_eye(eye)
        return eye

    async def drain(self):
        if self._task is not None:
            await self._task

    async def cancel(self):
        if self._task is not None and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self.pipeline.reset()
