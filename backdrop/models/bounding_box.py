from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """
    Vertical extent of visible content, inclusive row indices.

    When nothing is visible the detector leaves the sentinels untouched
    (top = height, bottom = 0), so top > bottom marks "no content".
    """
    top: int
    bottom: int

    @property
    def is_empty(self) -> bool:
        return self.top > self.bottom

    @property
    def content_height(self) -> int:
        return self.bottom - self.top + 1

    @property
    def padding_top(self) -> int:
        return self.top

    def padding_bottom(self, height: int) -> int:
        return height - self.bottom - 1
