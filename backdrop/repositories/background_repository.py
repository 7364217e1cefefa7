from __future__ import annotations
from pathlib import Path
from typing import Iterable, List, Union
import os
import random
import logging

from dotenv import load_dotenv

from ..models.raster import Raster
from ..models.errors import EmptyCatalog
from .raster_repository import RasterRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class BackgroundRepository:
    """
    Background catalog backed by a directory of images.

    The listing is re-read on every call; nothing is cached across requests.
    """
    def __init__(
        self,
        folder: Union[str, Path, None] = None,
        *,
        exts: Iterable[str] | None = None,
        raster_repository: RasterRepository | None = None,
        seed: int | None = None,
    ):
        self.folder = Path(folder or os.getenv("BACKGROUNDS_DIR", "backgrounds"))
        self.VALID_EXTS = {
            e.strip().lower()
            for e in (exts or os.getenv("VALID_BACKGROUND_EXTENSIONS", ".jpg,.jpeg,.png").split(","))
        }
        self.raster_repository = raster_repository or RasterRepository()

        if seed is None and os.getenv("RANDOM_SEED"):
            seed = int(os.getenv("RANDOM_SEED"))
        self._rng = random.Random(seed)

    def list_backgrounds(self) -> List[Path]:
        if not self.folder.is_dir():
            return []
        return sorted(
            p for p in self.folder.iterdir()
            if p.is_file() and p.suffix.lower() in self.VALID_EXTS
        )

    def pick(self) -> Path:
        candidates = self.list_backgrounds()
        if not candidates:
            raise EmptyCatalog(f"No background images in {self.folder}")
        return self._rng.choice(candidates)

    def load_random(self) -> Raster:
        path = self.pick()
        logger.info(f"Using background: {path.name}")
        return self.raster_repository.load(path)
