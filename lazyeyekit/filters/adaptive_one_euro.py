from __future__ import annotations
from .one_euro import OneEuro


class AdaptiveOneEuro:
    """
    Two-axis 1-euro filter for the gaze vector. Smooths harder when the eye
    landmarks came back with low confidence (partial contours).
    """
    def __init__(self, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        self.base_min = min_cutoff
        self.fx = OneEuro(min_cutoff=min_cutoff, beta=beta, d_cutoff=d_cutoff)
        self.fy = OneEuro(min_cutoff=min_cutoff, beta=beta, d_cutoff=d_cutoff)

    def __call__(self, x, y, conf: float, t=None):
        # conf in [0..1]; lower conf -> lower cutoff (more smoothing)
        k = min(1.0, max(0.3, conf / 0.9))
        self.fx.min_cutoff = self.base_min * k
        self.fy.min_cutoff = self.base_min * k
        return self.fx(x, t), self.fy(y, t)

    def reset(self):
        self.fx.reset(); self.fy.reset()
