"""
Stimulus sequences for the training exercises.

Every target is a pure function of (kind, step, elapsed_ms): the same call
always returns the same target, so a recorded session can be replayed and
scored again. Steps wrap around the pattern length; when to stop is up to
the caller.
"""
from __future__ import annotations
import math
from typing import Iterator, Tuple
from ..runtime.events import ExerciseTarget

RGB = Tuple[int, int, int]
BLUE = (0x3B, 0x82, 0xF6); RED = (0xEF, 0x44, 0x44); GREEN = (0x10, 0xB9, 0x81)
AMBER = (0xF5, 0x9E, 0x0B); VIOLET = (0x8B, 0x5C, 0xF6); CYAN = (0x06, 0xB6, 0xD4)
CRIMSON = (0xDC, 0x26, 0x26); PURPLE = (0x7C, 0x3A, 0xED)

PURSUIT_REFRESH_MS = 100
PURSUIT_OMEGA = 1.0  # rad/s
GUIDED_STEP_MS = 60_000


def _t(x, y, size, color, ms) -> ExerciseTarget:
    return ExerciseTarget(x=x, y=y, size=size, color=color, duration_ms=ms)


SACCADES = (
    _t(20, 20, 30, BLUE, 1000),
    _t(80, 20, 30, RED, 1000),
    _t(20, 80, 30, GREEN, 1000),
    _t(80, 80, 30, AMBER, 1000),
    _t(50, 50, 30, VIOLET, 1000),
)
CONVERGENCE = tuple(_t(50, 50, s, CRIMSON, 2000) for s in (50, 30, 20, 15))
BINOCULAR = (
    _t(30, 50, 25, PURPLE, 1500),
    _t(70, 50, 25, PURPLE, 1500),
    _t(50, 30, 25, PURPLE, 1500),
    _t(50, 70, 25, PURPLE, 1500),
)
# look up, down, left, right; step 4 is the circular sweep
GUIDED = (
    _t(50, 20, 30, BLUE, GUIDED_STEP_MS),
    _t(50, 80, 30, BLUE, GUIDED_STEP_MS),
    _t(20, 50, 30, BLUE, GUIDED_STEP_MS),
    _t(80, 50, 30, BLUE, GUIDED_STEP_MS),
)
GUIDED_STEPS = ("look-up", "look-down", "look-left", "look-right", "look-circular")

_FIXED = {"saccades": SACCADES, "convergence": CONVERGENCE, "binocular": BINOCULAR}
KINDS = ("saccades", "smooth-pursuit", "convergence", "binocular", "guided")


def pattern_length(kind: str) -> int:
    if kind in _FIXED: return len(_FIXED[kind])
    if kind == "smooth-pursuit": return 1
    if kind == "guided": return len(GUIDED_STEPS)
    raise ValueError(f"unknown exercise kind: {kind!r}")


def pursuit_position(elapsed_ms: float, sub_mode: str = "figure-eight", omega: float = PURSUIT_OMEGA) -> Tuple[float, float]:
    t = elapsed_ms / 1000.0
    if sub_mode == "figure-eight":
        return 50 + 30 * math.sin(omega * t), 50 + 20 * math.sin(2 * omega * t)
    if sub_mode == "circle":
        return 50 + 30 * math.sin(t), 50 + 30 * math.cos(t)
    raise ValueError(f"unknown pursuit sub-mode: {sub_mode!r}")


def target(kind: str, step: int, elapsed_ms: float = 0, sub_mode: str = "figure-eight") -> ExerciseTarget:
    """Target on screen for `kind` at `step`, `elapsed_ms` into the exercise."""
    i = step % pattern_length(kind)
    if kind in _FIXED:
        return _FIXED[kind][i]
    if kind == "smooth-pursuit":
        x, y = pursuit_position(elapsed_ms, sub_mode)
        return _t(x, y, 25, CYAN, PURSUIT_REFRESH_MS)
    # guided
    if i < len(GUIDED):
        return GUIDED[i]
    x, y = pursuit_position(elapsed_ms, "circle")
    return _t(x, y, 30, BLUE, GUIDED_STEP_MS)


def iter_targets(kind: str, count: int, sub_mode: str = "figure-eight") -> Iterator[Tuple[int, int, ExerciseTarget]]:
    """(step, start_ms, target) for the first `count` steps, back to back."""
    t0 = 0
    for step in range(count):
        tgt = target(kind, step, t0, sub_mode)
        yield step, t0, tgt
        t0 += tgt.duration_ms
