import logging

from ..models.raster import Raster
from ..models.bounding_box import BoundingBox

logger = logging.getLogger(__name__)


class ReanchorService:
    """
    Settles sparse content toward the bottom of its canvas.

    When there is more empty space below the content than above it, the
    content rows are moved down by (padding_bottom - padding_top) onto a
    fresh transparent canvas of the same size. The two paddings swap, so a
    second pass never shifts again.
    """

    @staticmethod
    def shift_for(raster: Raster, bbox: BoundingBox) -> int:
        """Rows to move the content down by; 0 means leave the raster alone."""
        if bbox.is_empty:
            return 0
        padding_top = bbox.padding_top
        padding_bottom = bbox.padding_bottom(raster.height)
        if padding_bottom > padding_top:
            return padding_bottom - padding_top
        return 0

    def reanchor(self, raster: Raster, bbox: BoundingBox) -> Raster:
        offset = self.shift_for(raster, bbox)
        if offset == 0:
            return raster

        canvas = Raster.blank(raster.width, raster.height)
        new_top = bbox.top + offset
        canvas.pixels[new_top:new_top + bbox.content_height] = raster.pixels[bbox.top:bbox.bottom + 1]
        canvas.path = raster.path

        logger.debug(f"Re-anchored rows {bbox.top}-{bbox.bottom} down by {offset}")
        return canvas
