from __future__ import annotations
import os
import logging
import cv2
from dotenv import load_dotenv

from ..models.raster import Raster
from ..models.fit_rect import FitRect
from ..models.errors import InvalidDimensions
from .raster_service import RasterService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

_ALIGN_X = ("left", "center", "right")
_ALIGN_Y = ("top", "center", "bottom")


def _offset(excess: int, align: str) -> int:
    if align in ("left", "top"):
        return 0
    if align == "center":
        return excess // 2
    return excess


class BackgroundFitService:
    """
    "Cover" fit: uniform resize so the background fills the target, then
    crop the overflow on one axis.

    • wider background  → match height, crop horizontally (right-aligned by default)
    • taller or equal    → match width, crop vertically (top-aligned by default)
    """

    def __init__(self, align_x: str | None = None, align_y: str | None = None):
        self.align_x = (align_x or os.getenv("BG_CROP_ALIGN_X", "right")).lower()
        self.align_y = (align_y or os.getenv("BG_CROP_ALIGN_Y", "top")).lower()
        if self.align_x not in _ALIGN_X:
            raise ValueError(f"align_x must be one of {_ALIGN_X}, got {self.align_x!r}")
        if self.align_y not in _ALIGN_Y:
            raise ValueError(f"align_y must be one of {_ALIGN_Y}, got {self.align_y!r}")

    def compute_fit_rect(self, bg_width: int, bg_height: int, target_w: int, target_h: int) -> FitRect:
        if bg_width <= 0 or bg_height <= 0:
            raise InvalidDimensions(f"Background has zero area: {bg_width}x{bg_height}")
        if target_w <= 0 or target_h <= 0:
            raise InvalidDimensions(f"Target has zero area: {target_w}x{target_h}")

        # bg_width/bg_height > target_w/target_h, without float ties
        if bg_width * target_h > target_w * bg_height:
            resized_h = target_h
            resized_w = max(target_w, round(bg_width * target_h / bg_height))
            crop_x = _offset(resized_w - target_w, self.align_x)
            return FitRect(crop_x=crop_x, crop_y=0, resized_width=resized_w, resized_height=resized_h)

        resized_w = target_w
        resized_h = max(target_h, round(bg_height * target_w / bg_width))
        crop_y = _offset(resized_h - target_h, self.align_y)
        return FitRect(crop_x=0, crop_y=crop_y, resized_width=resized_w, resized_height=resized_h)

    @staticmethod
    def _resize(raster: Raster, width: int, height: int) -> Raster:
        if (width, height) == (raster.width, raster.height):
            return Raster(pixels=raster.pixels.copy(), path=raster.path)

        shrinking = width * height < raster.width * raster.height
        interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_LINEAR
        pixels = cv2.resize(raster.pixels, (width, height), interpolation=interpolation)
        return Raster(pixels=pixels, path=raster.path)

    def fit(self, background: Raster, target_w: int, target_h: int) -> Raster:
        """
        Returns:
            Raster: a new raster of exactly (target_w, target_h).
        """
        RasterService.require_area(background, "background")
        rect = self.compute_fit_rect(background.width, background.height, target_w, target_h)

        resized = self._resize(background, rect.resized_width, rect.resized_height)
        window = resized.pixels[rect.crop_y:rect.crop_y + target_h, rect.crop_x:rect.crop_x + target_w]

        logger.debug(
            f"Fitted background {background.width}x{background.height} → "
            f"{rect.resized_width}x{rect.resized_height}, crop at ({rect.crop_x},{rect.crop_y})"
        )
        return Raster(pixels=window.copy(), path=background.path)
