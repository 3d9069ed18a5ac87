import math, time


def _alpha(rate: float, cutoff: float) -> float:
    tau = 1.0 / (2 * math.pi * cutoff)
    return 1.0 / (1.0 + tau * rate)


class OneEuro:
    """
    1-euro filter (Casiez et al.) for one scalar stream, timestamps in seconds.
    Cutoff rises with speed: steady input is smoothed hard, fast moves pass.
    """
    def __init__(self, freq=30.0, min_cutoff=1.0, beta=0.0, d_cutoff=1.0):
        self.rate = freq
        self.min_cutoff = min_cutoff; self.beta = beta; self.d_cutoff = d_cutoff
        self.reset()

    def reset(self):
        self.value = None; self.speed = 0.0; self.last_t = None

    def __call__(self, x, t=None):
        t = time.time() if t is None else t
        if self.last_t is None:
            self.value, self.last_t = x, t
            return x
        if t <= self.last_t:
            return self.value
        self.rate = 1.0 / (t - self.last_t); self.last_t = t
        raw_speed = (x - self.value) * self.rate
        a = _alpha(self.rate, self.d_cutoff)
        self.speed = a * raw_speed + (1 - a) * self.speed
        a = _alpha(self.rate, self.min_cutoff + self.beta * abs(self.speed))
        self.value = a * x + (1 - a) * self.value
        return self.value
