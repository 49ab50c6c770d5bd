"""Min/max based rescaling of a value vector."""

from __future__ import annotations

import numpy as np


class VectorNormalizer:
    """
    Rescale values with an offset of min(values) and a scale of half the range.

    normalize() maps the minimum to 0 and the maximum to 2.

    Attributes:
        values: the values to rescale
    """

    def __init__(self, values):
        self.values = np.asarray(values, dtype=float)
        if self.values.size == 0:
            raise ValueError("values cannot be empty")
        self._min = float(np.min(self.values))
        self._max = float(np.max(self.values))

    @property
    def offset(self) -> float:
        return self._min

    @property
    def scale(self) -> float:
        return (self._max - self._min) / 2.0

    def normalize(self) -> np.ndarray:
        """
        Rescaled copy of the values.

        Raises:
            ValueError: If all values are equal (zero scale)
        """
        scale = self.scale
        if scale == 0:
            raise ValueError("Cannot normalize constant values")
        return (self.values - self.offset) / scale
