from __future__ import annotations
import os
import logging
import numpy as np
from dotenv import load_dotenv

from ..models.raster import Raster
from ..models.bounding_box import BoundingBox
from ..models.errors import NoVisibleContent

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ContentDetectionService:
    """
    Finds the vertical span of rows holding visible pixels.

    A row counts as soon as one of its pixels has alpha strictly above
    the visibility threshold.
    """

    def __init__(self, alpha_thr: int | None = None):
        self.ALPHA_THR = alpha_thr if alpha_thr is not None else int(os.getenv("CONTENT_ALPHA_THR", "10"))

    def visible_rows(self, raster: Raster) -> np.ndarray:
        """Boolean mask (H,) of rows containing at least one visible pixel."""
        return (raster.alpha > self.ALPHA_THR).any(axis=1)

    def get_bounding_box(self, raster: Raster) -> BoundingBox:
        """
        Args:
            raster (Raster): Image to scan. Not modified.

        Returns:
            BoundingBox: first/last visible row. With nothing visible the
            sentinels are returned as-is: top=height, bottom=0.
        """
        rows = np.flatnonzero(self.visible_rows(raster))
        if rows.size == 0:
            logger.debug(f"No pixel above alpha {self.ALPHA_THR} in {raster.width}x{raster.height} raster")
            return BoundingBox(top=raster.height, bottom=0)
        return BoundingBox(top=int(rows[0]), bottom=int(rows[-1]))

    @staticmethod
    def require_content(bbox: BoundingBox) -> BoundingBox:
        if bbox.is_empty:
            raise NoVisibleContent("Foreground has no visible content")
        return bbox
