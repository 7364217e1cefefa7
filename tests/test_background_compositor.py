"""
End-to-end tests for the compositing pipeline and its CLI.

Run with:
    pytest tests/test_background_compositor.py -v
"""

import numpy as np
import pytest

from backdrop.pipeline.background_compositor import add_background, add_random_background
from backdrop.repositories.background_repository import BackgroundRepository
from backdrop.repositories.raster_repository import RasterRepository
from backdrop.services.background_fit_service import BackgroundFitService
from backdrop.models.raster import Raster
from backdrop.models.errors import NoVisibleContent, InvalidDimensions, EmptyCatalog
from backdrop.cli.add_background import main

from conftest import solid, with_rows

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def fit_service():
    return BackgroundFitService(align_x="right", align_y="top")


class TestAddBackground:

    def test_sparse_content_settles_down(self, fit_service):
        fg = with_rows(100, 100, 10, 20, RED)
        out = add_background(fg, solid(200, 100, BLUE), fit_service=fit_service)

        assert (out.width, out.height) == (100, 100)
        assert (out.pixels[79:90] == RED).all()
        assert (out.pixels[:79] == BLUE).all()
        assert (out.pixels[90:] == BLUE).all()

    def test_centered_content_stays(self, fit_service):
        fg = with_rows(100, 100, 40, 59, RED)
        out = add_background(fg, solid(100, 100, BLUE), fit_service=fit_service)

        assert (out.pixels[40:60] == RED).all()
        assert (out.pixels[:40] == BLUE).all()
        assert (out.pixels[60:] == BLUE).all()

    def test_wide_background_right_window(self, fit_service):
        bg = solid(200, 100, BLUE)
        bg.pixels[:, 100:] = (0, 255, 0, 255)

        out = add_background(solid(100, 100), bg, fit_service=fit_service)
        assert (out.pixels == (0, 255, 0, 255)).all()

    def test_output_takes_foreground_size(self):
        out = add_background(with_rows(37, 53, 0, 52), solid(640, 480, BLUE))
        assert (out.width, out.height) == (37, 53)

    def test_empty_foreground_is_composited_unchanged(self, fit_service):
        out = add_background(solid(20, 20), solid(20, 20, BLUE), fit_service=fit_service)
        assert (out.pixels == BLUE).all()

    def test_empty_foreground_can_be_an_error(self):
        with pytest.raises(NoVisibleContent):
            add_background(solid(20, 20), solid(20, 20, BLUE), require_content=True)

    def test_zero_area_foreground(self):
        empty = Raster(pixels=np.zeros((0, 5, 4), dtype=np.uint8))
        with pytest.raises(InvalidDimensions):
            add_background(empty, solid(5, 5, BLUE))


@pytest.fixture
def catalog(tmp_path):
    folder = tmp_path / "backgrounds"
    RasterRepository().save(solid(50, 50, BLUE), folder / "blue.png")
    return folder


class TestAddRandomBackground:

    def test_chroma_key_pre_pass(self, catalog):
        fg = solid(10, 10, (250, 250, 250, 255))
        fg.pixels[5:] = RED

        out = add_random_background(fg, background_repository=BackgroundRepository(catalog), chroma_key=True)

        # white rows were keyed out, red rows 5..9 stay at the bottom
        assert (out.pixels[:5] == BLUE).all()
        assert (out.pixels[5:] == RED).all()

    def test_without_chroma_key_white_stays(self, catalog):
        fg = solid(10, 10, (250, 250, 250, 255))
        out = add_random_background(fg, background_repository=BackgroundRepository(catalog))
        assert (out.pixels == (250, 250, 250, 255)).all()

    def test_services_reach_add_background(self, tmp_path):
        folder = tmp_path / "wide"
        bg = solid(20, 10, BLUE)
        bg.pixels[:, 10:] = (0, 255, 0, 255)
        RasterRepository().save(bg, folder / "split.png")

        out = add_random_background(
            solid(10, 10),
            background_repository=BackgroundRepository(folder),
            fit_service=BackgroundFitService(align_x="left"),
        )
        assert (out.pixels == BLUE).all()

    def test_empty_catalog(self, tmp_path):
        with pytest.raises(EmptyCatalog):
            add_random_background(solid(4, 4, RED), background_repository=BackgroundRepository(tmp_path))


class TestCli:

    def test_writes_png(self, catalog, tmp_path):
        source = RasterRepository().save(with_rows(30, 30, 0, 4, RED), tmp_path / "fg.png")
        output = tmp_path / "out" / "result.png"

        assert main([str(source), "--backgrounds", str(catalog), "-o", str(output)]) == 0

        result = RasterRepository().load(output)
        assert (result.width, result.height) == (30, 30)
        assert (result.pixels[25:] == RED).all()

    def test_missing_source_fails(self, catalog, tmp_path):
        assert main([str(tmp_path / "nope.png"), "--backgrounds", str(catalog)]) == 1

    def test_empty_catalog_fails(self, tmp_path):
        source = RasterRepository().save(solid(5, 5, RED), tmp_path / "fg.png")
        assert main([str(source), "--backgrounds", str(tmp_path / "empty")]) == 1

    def test_unwritable_output_fails(self, catalog, tmp_path):
        source = RasterRepository().save(with_rows(8, 8, 0, 2, RED), tmp_path / "fg.png")
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("regular file")

        assert main([str(source), "--backgrounds", str(catalog), "-o", str(blocker / "out.png")]) == 1
