from __future__ import annotations
from pathlib import Path
from io import BytesIO
from typing import Union
import os
import time
import logging

import numpy as np
import requests
from PIL import Image as PILImage, UnidentifiedImageError
from dotenv import load_dotenv

from ..models.raster import Raster
from ..models.errors import SourceUnavailable

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

PNG_CONTENT_TYPE = "image/png"


class RasterRepository:
    """
    Handles decode/encode and file/URL I/O for Raster entities.
    Every failure on the way in is reported as SourceUnavailable.
    """
    def __init__(self, timeout: float | None = None):
        self.timeout = timeout if timeout is not None else float(os.getenv("SOURCE_TIMEOUT_S", "15"))

    @staticmethod
    def create_raster(pixels: np.ndarray, path: Union[str, Path] = None) -> Raster:
        if path is None:
            return Raster(pixels)
        return Raster(pixels=pixels, path=Path(path))

    @staticmethod
    def decode(data: bytes, path: Union[str, Path] = None) -> Raster:
        """Decode an encoded image (PNG, JPEG, first frame of GIF...) into RGBA."""
        if not data:
            raise SourceUnavailable("Empty image buffer")
        try:
            with PILImage.open(BytesIO(data)) as pil_img:
                rgba = pil_img.convert("RGBA")
        except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, SyntaxError, ValueError) as err:
            raise SourceUnavailable(f"Could not decode image: {err}") from err

        # np.array (not asarray) so the raster owns a writable buffer
        return RasterRepository.create_raster(np.array(rgba, dtype=np.uint8), path)

    def load(self, path: Union[str, Path]) -> Raster:
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as err:
            raise SourceUnavailable(f"Image not found or unreadable: {path}") from err
        return self.decode(data, path)

    def fetch(self, url: str) -> Raster:
        """
        Download an image with a bounded wait.

        The timeout bounds the whole download, not only each socket read,
        so a server trickling bytes still fails once the deadline passes.
        """
        deadline = time.monotonic() + self.timeout
        chunks = []
        try:
            with requests.get(url, timeout=self.timeout, stream=True) as response:
                response.raise_for_status()
                for chunk in response.iter_content(chunk_size=64 * 1024):
                    if time.monotonic() > deadline:
                        raise SourceUnavailable(f"Timed out after {self.timeout}s fetching {url}")
                    chunks.append(chunk)
        except requests.RequestException as err:
            raise SourceUnavailable(f"Could not fetch {url}: {err}") from err

        data = b"".join(chunks)
        logger.debug(f"Fetched {len(data)} bytes from {url}")
        return self.decode(data)

    def read(self, source: Union[str, Path]) -> Raster:
        """Load from an http(s) URL or a local path."""
        if isinstance(source, str) and source.lower().startswith(("http://", "https://")):
            return self.fetch(source)
        return self.load(source)

    @staticmethod
    def encode_png(raster: Raster) -> bytes:
        buffer = BytesIO()
        PILImage.fromarray(np.ascontiguousarray(raster.pixels)).save(buffer, format="PNG")
        return buffer.getvalue()

    def save(self, raster: Raster, path: Union[str, Path] = None) -> Path:
        path = Path(path) if path is not None else raster.path
        if path is None:
            raise ValueError("Raster has no path to save to")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.encode_png(raster))
        return path
