import os
import sys
import logging
import argparse
from pathlib import Path
from uuid import uuid4
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.errors import CompositingError
from ..pipeline.background_compositor import add_random_background
from ..repositories.background_repository import BackgroundRepository
from ..services.raster_service import RasterService

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Composite an image over a random background and write a PNG."
    )
    parser.add_argument("source", help="Foreground image: local path or http(s) URL")
    parser.add_argument("--backgrounds", default=os.getenv("BACKGROUNDS_DIR", "backgrounds"),
                        help="Directory of background images (.jpg, .jpeg, .png)")
    parser.add_argument("-o", "--output", default=None,
                        help="Output PNG path (default: OUTPUT_DIR_PATH/<uuid>.png)")
    parser.add_argument("--chroma-key", action="store_true",
                        help="Make near-white foreground pixels transparent first")
    parser.add_argument("--strict-chroma-key", action="store_true",
                        help="Like --chroma-key, but only for pixels that are already mostly opaque")
    parser.add_argument("--require-content", action="store_true",
                        help="Fail instead of compositing a fully transparent foreground")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    raster_service = RasterService()
    output = Path(args.output) if args.output else \
        Path(os.getenv("OUTPUT_DIR_PATH", "data/output")) / f"{uuid4().hex}.png"

    try:
        foreground = raster_service.read(args.source)
        logger.info(f"Foreground loaded: {foreground.width}x{foreground.height}")

        result = add_random_background(
            foreground,
            background_repository=BackgroundRepository(args.backgrounds),
            chroma_key=args.chroma_key,
            strict_chroma_key=args.strict_chroma_key,
            require_content=args.require_content,
        )
        saved = raster_service.save(result, output)
    except CompositingError as err:
        logger.error(f"{type(err).__name__}: {err}")
        return 1
    except OSError as err:
        logger.error(f"Could not write {output}: {err}")
        return 1

    logger.info(f"Wrote {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
