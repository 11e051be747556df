"""
render.py — Density → Colour
=============================
Periodic colour map used by the viewer. Each channel is a sine wave
with a different phase, so increasing density cycles through hues:

  i = value / max_value
  channel = round(sin(0.024 * i + phase) * 127 + 128),  phase = 0, 2, 4
"""

import numpy as np

FREQUENCY = 0.024
PHASES    = (0.0, 2.0, 4.0)   # red, green, blue (radians)
AMPLITUDE = 127.0
BIAS      = 128.0

DEFAULT_MAX_VALUE = 3


def density_to_rgb(values, max_value: float = DEFAULT_MAX_VALUE) -> np.ndarray:
    """
    Map density to 8-bit RGB.

    Args:
        values    : Scalar or array of densities
        max_value : Normaliser applied before the sine waves

    Returns:
        uint8 array of shape values.shape + (3,)
    """
    i = np.asarray(values, dtype=np.float64) / max_value
    channels = [
        np.round(np.sin(FREQUENCY * i + phase) * AMPLITUDE + BIAS)
        for phase in PHASES
    ]
    return np.stack(channels, axis=-1).astype(np.uint8)
