from __future__ import annotations
import os
import logging
from dotenv import load_dotenv

from ..models.raster import Raster

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ChromaKeyService:
    """
    Turns near-white pixels transparent, in place.
    """

    def __init__(self, rgb_thr: int | None = None, alpha_thr: int | None = None):
        self.RGB_THR = rgb_thr if rgb_thr is not None else int(os.getenv("CHROMA_KEY_THR", "240"))
        self.ALPHA_THR = alpha_thr if alpha_thr is not None else int(os.getenv("CHROMA_KEY_ALPHA_THR", "200"))

    def key_out_white(self, raster: Raster, strict: bool = False) -> int:
        """
        Set alpha to 0 wherever R, G and B are all above RGB_THR.

        Args:
            raster (Raster): mutated in place.
            strict (bool): also require the current alpha to be above ALPHA_THR.

        Returns:
            int: number of pixels keyed out.
        """
        mask = (raster.pixels[:, :, :3] > self.RGB_THR).all(axis=2)
        if strict:
            mask &= raster.alpha > self.ALPHA_THR

        raster.pixels[:, :, 3][mask] = 0

        count = int(mask.sum())
        logger.debug(f"Chroma-key removed {count} pixels (thr={self.RGB_THR}, strict={strict})")
        return count
