from __future__ import annotations
import logging, time
from dataclasses import dataclass
from typing import Iterator
import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    image: np.ndarray  # BGR
    index: int
    ts: float          # seconds
    fps: float         # what the capture claims to deliver


def frames(source: int|str = 0, width: int = 1280, height: int = 720, fallback_fps: float = 30.0) -> Iterator[Frame]:
    """
    Read frames from a camera index or a video file until it runs dry.

    Video files are timestamped from their own frame rate so a recording
    replays with the same timing it was captured with.
    """
    cap = cv2.VideoCapture(source)
    if isinstance(source, int):
        if width: cap.set(cv2.CAP_PROP_FRAME_WIDTH, width)
        if height: cap.set(cv2.CAP_PROP_FRAME_HEIGHT, height)
    if not cap.isOpened():
        raise RuntimeError(f"Cannot open video source {source!r}")
    fps = cap.get(cv2.CAP_PROP_FPS) or fallback_fps
    logger.info("opened %r at %.1f fps", source, fps)
    t0 = time.time(); i = 0
    try:
        while True:
            ok, img = cap.read()
            if not ok: break
            ts = time.time() if isinstance(source, int) else t0 + i / fps
            yield Frame(img, i, ts, fps)
            i += 1
    finally:
        cap.release()
