from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import numpy as np

from .errors import InvalidDimensions


@dataclass
class Raster:
    """
    Simple data object: RGBA pixels (+ optional source path for bookkeeping).
    No decode/encode logic outside the repositories.
    """
    pixels: np.ndarray # Shape (H, W, 4), dtype uint8, RGBA order, row-major.
    path: Path | None = None # Source of the raster.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise InvalidDimensions(f"Expected (H, W, 4) RGBA pixels, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise InvalidDimensions(f"Expected uint8 pixels, got {self.pixels.dtype}")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def alpha(self) -> np.ndarray:
        """View on the alpha channel, shape (H, W)."""
        return self.pixels[:, :, 3]

    @classmethod
    def blank(cls, width: int, height: int) -> "Raster":
        """Fully transparent canvas."""
        return cls(pixels=np.zeros((height, width, 4), dtype=np.uint8))
