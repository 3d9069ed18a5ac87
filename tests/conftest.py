import numpy as np
import pytest
from lazyeyekit.eye.contours import LandmarkFrame, LEFT_EYE, RIGHT_EYE

W, H = 640, 480


def _contour(cx, cy, a=15.0, b=6.0):
    # 0/3 corners, 1/5 lids, remaining points in +/- pairs so the mean is (cx,cy)
    off = [(0, 0)] * 16
    off[0] = (-a, 0); off[3] = (a, 0); off[1] = (0, -b); off[5] = (0, b)
    rest = [2, 4, 6, 7, 8, 9, 10, 11, 12, 13, 14, 15]
    pairs = [(a/2, b/2), (-a/2, b/2), (a/3, -b/2), (a/4, b/3), (-a/4, b/3), (a/5, 0)]
    for k, (dx, dy) in enumerate(pairs):
        off[rest[2*k]] = (dx, dy); off[rest[2*k+1]] = (-dx, -dy)
    return [(cx + dx, cy + dy) for dx, dy in off]


def fake_face(left=(290, 100), right=(350, 100), openness=0.4, w=W, h=H):
    """478 FaceMesh-sized points; eyes at the given pixel centers, everything else between them."""
    a = 15.0; b = openness * a
    mid = ((left[0] + right[0]) / 2 / w, (left[1] + right[1]) / 2 / h)
    pts = np.tile(np.array(mid, dtype=np.float32), (478, 1))
    for idx, (cx, cy) in ((LEFT_EYE, left), (RIGHT_EYE, right)):
        for i, (x, y) in zip(idx, _contour(cx, cy, a, b)):
            pts[i] = (x / w, y / h)
    return LandmarkFrame(pts, w, h)


@pytest.fixture
def face():
    return fake_face
