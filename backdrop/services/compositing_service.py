import numpy as np

from ..models.raster import Raster
from ..models.errors import InvalidDimensions


class CompositingService:
    """
    Straight-alpha "source-over" blending of a foreground onto a background
    of the same size, at offset (0, 0), both opacities at 1.0.
    """

    @staticmethod
    def _compose(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
        src_a = src[:, :, 3:4].astype("float64") / 255.0
        dst_a = dst[:, :, 3:4].astype("float64") / 255.0
        src_rgb = src[:, :, :3].astype("float64")
        dst_rgb = dst[:, :, :3].astype("float64")

        dst_weight = dst_a * (1.0 - src_a)
        out_a = src_a + dst_weight

        # where nothing is left visible, keep the background colour
        safe_a = np.where(out_a > 0, out_a, 1.0)
        out_rgb = np.where(out_a > 0, (src_rgb * src_a + dst_rgb * dst_weight) / safe_a, dst_rgb)

        out = np.concatenate([out_rgb, out_a * 255.0], axis=2)
        return np.clip(np.rint(out), 0, 255).astype(np.uint8)

    def composite(self, background: Raster, foreground: Raster) -> Raster:
        """
        Returns a new Raster; neither input is modified.
        """
        if (foreground.width, foreground.height) != (background.width, background.height):
            raise InvalidDimensions(
                f"Foreground {foreground.width}x{foreground.height} does not match "
                f"background {background.width}x{background.height}"
            )
        return Raster(pixels=self._compose(foreground.pixels, background.pixels), path=foreground.path)
