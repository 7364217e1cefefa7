from dataclasses import dataclass


@dataclass(frozen=True)
class FitRect:
    """Where to resize a background to, and which window of it to keep."""
    crop_x: int
    crop_y: int
    resized_width: int
    resized_height: int
