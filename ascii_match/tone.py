"""
Tone Mapping

Contrast/gamma curve applied to raw image cell samples before matching:

    f(x) = clamp(contrast * (x ** gamma - 0.5) + 0.5, 0, 1)

Glyph signatures are never tone mapped.
"""

from dataclasses import dataclass
import numpy as np

from .intensity import Intensity


@dataclass(frozen=True)
class ToneCurve:
    """
    Contrast and gamma for cell samples.

    contrast=1.0, gamma=1.0 is the identity on [0, 1]. Parameters are not
    bounded; only the output is clamped.
    """
    contrast: float = 1.0
    gamma: float = 1.0

    def __call__(self, x: float) -> float:
        # float64 arithmetic so 0 ** negative gives inf instead of raising
        with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
            f = self.contrast * (np.power(np.float64(x), self.gamma) - 0.5) + 0.5
        # fmax/fmin ignore NaN, so NaN clamps to 0
        return float(np.fmin(np.fmax(f, 0.0), 1.0))

    def apply(self, intensity: Intensity) -> Intensity:
        return intensity.map(self)
