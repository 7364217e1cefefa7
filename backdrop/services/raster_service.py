from __future__ import annotations
from pathlib import Path
from typing import Union

from ..models.raster import Raster
from ..models.errors import InvalidDimensions
from ..repositories.raster_repository import RasterRepository


class RasterService:
    """I/O helpers.  No compositing logic."""
    def __init__(self, raster_repository: RasterRepository | None = None):
        self.raster_repository = raster_repository or RasterRepository()

    def read(self, source: Union[str, Path]) -> Raster:
        """Load a raster from a local path or an http(s) URL."""
        return self.raster_repository.read(source)

    def to_png(self, raster: Raster) -> bytes:
        return self.raster_repository.encode_png(raster)

    def save(self, raster: Raster, path: Union[str, Path] = None) -> Path:
        return self.raster_repository.save(raster, path)

    @staticmethod
    def require_area(raster: Raster, role: str = "raster") -> None:
        """
        Reject zero-width or zero-height rasters.

        Raises:
            InvalidDimensions: if the raster has no pixels.
        """
        if raster.width <= 0 or raster.height <= 0:
            raise InvalidDimensions(f"{role} has zero area: {raster.width}x{raster.height}")
