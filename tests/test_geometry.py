import numpy as np
import pytest
from pydantic import ValidationError
from lazyeyekit.eye.contours import EyeContours, LandmarkFrame, LEFT_EYE
from lazyeyekit.eye.geometry import EyeGeometryExtractor, eye_center, eye_openness


def test_center_scaled_to_pixels(face):
    g = EyeGeometryExtractor().extract(face(left=(290, 100), right=(350, 120)))
    assert g.left.x == pytest.approx(290, abs=1e-2) and g.left.y == pytest.approx(100, abs=1e-2)
    assert g.right.x == pytest.approx(350, abs=1e-2) and g.right.y == pytest.approx(120, abs=1e-2)
    assert g.left.confidence == pytest.approx(0.9)


def test_center_inside_contour():
    rng = np.random.default_rng(0)
    for _ in range(20):
        pts = rng.random((478, 2)).astype(np.float32)
        frame = LandmarkFrame(pts, 640, 480)
        c = eye_center(frame, LEFT_EYE)
        px = frame.pixels(LEFT_EYE)
        assert px[:, 0].min() - 1e-3 <= c.x <= px[:, 0].max() + 1e-3
        assert px[:, 1].min() - 1e-3 <= c.y <= px[:, 1].max() + 1e-3


def test_openness_ratio(face):
    frame = face(openness=0.4)
    assert eye_openness(frame, LEFT_EYE) == pytest.approx(0.4, abs=1e-3)
    assert EyeGeometryExtractor().extract(face(openness=0.1)).openness == pytest.approx(0.1, abs=1e-3)


def test_short_contour_defaults_open(face):
    frame = face(openness=0.05)
    assert eye_openness(frame, LEFT_EYE[:5]) == 1.0
    # indices past the end of the frame are unusable too
    small = LandmarkFrame(frame.pts[:100], 640, 480)
    assert eye_openness(small, LEFT_EYE) == 1.0


def test_partial_contour_lowers_confidence(face):
    small = LandmarkFrame(face().pts[:150], 640, 480)
    c = eye_center(small, LEFT_EYE)
    assert 0.0 < c.confidence < 0.9


def test_contours_validated():
    with pytest.raises(ValidationError):
        EyeContours(left=(1, 2, 2, 3, 4, 5))
    with pytest.raises(ValidationError):
        EyeContours(right=(-1, 2, 3))


def test_openness_needs_six_points_in_frame():
    # the four points read are present but two contour indices are not
    pts = np.array([[0.4, 0.5], [0.45, 0.48], [0.5, 0.5], [0.45, 0.52]], dtype=np.float32)
    frame = LandmarkFrame(pts, 640, 480)
    assert eye_openness(frame, (0, 1, 50, 2, 51, 3)) == 1.0
    assert eye_openness(frame, (0, 1, 1, 2, 3, 3)) == pytest.approx(19.2 / 64, abs=1e-3)
