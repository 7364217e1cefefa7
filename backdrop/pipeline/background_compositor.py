# pipeline/background_compositor.py
from __future__ import annotations
import logging

from ..models.raster import Raster
from ..models.errors import NoVisibleContent
from ..services.raster_service import RasterService
from ..services.content_detection_service import ContentDetectionService
from ..services.reanchor_service import ReanchorService
from ..services.background_fit_service import BackgroundFitService
from ..services.compositing_service import CompositingService
from ..services.chroma_key_service import ChromaKeyService
from ..repositories.background_repository import BackgroundRepository

logger = logging.getLogger(__name__)


def add_background(
    foreground: Raster,
    background: Raster,
    *,
    detection_service: ContentDetectionService | None = None,
    reanchor_service: ReanchorService | None = None,
    fit_service: BackgroundFitService | None = None,
    compositing_service: CompositingService | None = None,
    require_content: bool = False,
) -> Raster:
    """
    Composite *foreground* over *background*:
        • find the visible rows of the foreground
        • settle them toward the bottom when there is more room below
        • cover-fit the background to the foreground canvas
        • alpha-blend foreground over background
    Returns a new Raster the size of the foreground.
    """
    detection_service = detection_service or ContentDetectionService()
    reanchor_service = reanchor_service or ReanchorService()
    fit_service = fit_service or BackgroundFitService()
    compositing_service = compositing_service or CompositingService()

    RasterService.require_area(foreground, "foreground")
    RasterService.require_area(background, "background")
    target_w, target_h = foreground.width, foreground.height

    # 1. bounding box
    bbox = detection_service.get_bounding_box(foreground)

    # 2. re-anchor (skipped when nothing is visible)
    try:
        detection_service.require_content(bbox)
        foreground = reanchor_service.reanchor(foreground, bbox)
    except NoVisibleContent:
        if require_content:
            raise
        logger.warning("Foreground has no visible content, compositing it unchanged")

    # 3. cover-fit the background
    fitted = fit_service.fit(background, target_w, target_h)

    # 4. source-over
    return compositing_service.composite(fitted, foreground)


def add_random_background(
    foreground: Raster,
    *,
    background_repository: BackgroundRepository | None = None,
    chroma_key_service: ChromaKeyService | None = None,
    chroma_key: bool = False,
    strict_chroma_key: bool = False,
    require_content: bool = False,
    **services,
) -> Raster:
    """
    Optional chroma-key pre-pass, then add_background() with a background
    picked from the catalog.

    Extra keyword arguments (detection_service, reanchor_service,
    fit_service, compositing_service) are passed on to add_background().
    """
    background_repository = background_repository or BackgroundRepository()

    if chroma_key or strict_chroma_key:
        chroma_key_service = chroma_key_service or ChromaKeyService()
        removed = chroma_key_service.key_out_white(foreground, strict=strict_chroma_key)
        logger.info(f"Chroma-key made {removed} near-white pixels transparent")

    background = background_repository.load_random()
    return add_background(foreground, background, require_content=require_content, **services)
