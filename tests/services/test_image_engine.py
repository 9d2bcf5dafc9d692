"""
Tests for ImageEngine batch operations
"""

import numpy as np
import pytest
from PIL import Image

from core.exceptions import ConfigurationError, DecodeError, EncodeError, FormatError
from schemas import ColorKey, Dimensions, ImageResizedEvent, MadeTransparentEvent
from services.image_engine import ImageEngine


def _read_rgba(path):
    with Image.open(path) as image:
        return np.array(image.convert("RGBA"))


class TestMakeTransparent:
    """Test bitmap to transparent PNG conversion"""

    def test_red_background_scenario(self, bmp_dir, engine, recorder):
        engine.made_transparent.subscribe(recorder)

        count = engine.make_transparent("#FF0000")

        assert count == 1
        assert recorder.events == [
            MadeTransparentEvent(old_path=bmp_dir / "a.bmp", new_path=bmp_dir / "a.png")
        ]

        pixels = _read_rgba(bmp_dir / "a.png")
        red = np.all(pixels[..., :3] == (255, 0, 0), axis=-1)
        assert red.sum() == 8 * 6 - 3 * 2
        assert np.all(pixels[red, 3] == 0)
        assert np.all(pixels[~red, 3] == 255)

    def test_non_matching_rgb_identical(self, bmp_dir, engine):
        source = _read_rgba(bmp_dir / "a.bmp")

        engine.make_transparent(ColorKey(r=255, g=0, b=0))

        output = _read_rgba(bmp_dir / "a.png")
        assert np.array_equal(output[..., :3], source[..., :3])

    def test_source_untouched(self, bmp_dir, engine):
        before = (bmp_dir / "a.bmp").read_bytes()
        engine.make_transparent("#FF0000")
        assert (bmp_dir / "a.bmp").read_bytes() == before

    def test_output_is_png_with_dpi(self, bmp_dir, engine):
        engine.make_transparent("#FF0000")

        with Image.open(bmp_dir / "a.png") as image:
            assert image.format == "PNG"
            assert image.info["dpi"] == pytest.approx((96, 96), abs=0.1)

    def test_deterministic_output(self, bmp_dir, engine):
        engine.make_transparent("#FF0000")
        first = (bmp_dir / "a.png").read_bytes()

        engine.make_transparent("#FF0000")

        assert (bmp_dir / "a.png").read_bytes() == first

    def test_not_recursive(self, bmp_dir, engine, recorder, rgb_image, write_image):
        write_image(bmp_dir / "sub" / "b.bmp", rgb_image(2, 2), format="BMP")
        engine.made_transparent.subscribe(recorder)

        engine.make_transparent("#FF0000")

        assert [e.old_path.name for e in recorder.events] == ["a.bmp"]
        assert not (bmp_dir / "sub" / "b.png").exists()

    def test_multiple_files_one_event_each(self, bmp_dir, engine, recorder, rgb_image, write_image):
        write_image(bmp_dir / "b.bmp", rgb_image(3, 3), format="BMP")
        engine.made_transparent.subscribe(recorder)

        assert engine.make_transparent("#FF0000") == 2
        assert sorted(e.new_path.name for e in recorder.events) == ["a.png", "b.png"]

    def test_upper_case_extension(self, tmp_path, engine, recorder, rgb_image, write_image):
        write_image(tmp_path / "A.BMP", rgb_image(2, 2), format="BMP")
        engine.made_transparent.subscribe(recorder)

        assert engine.make_transparent("#FF0000") == 1
        assert recorder.events[0].new_path == tmp_path / "A.png"
        assert (tmp_path / "A.png").exists()

    def test_listeners_called_in_order(self, bmp_dir, engine):
        calls = []
        engine.made_transparent.subscribe(lambda e: calls.append("first"))
        engine.made_transparent.subscribe(lambda e: calls.append("second"))

        engine.make_transparent("#FF0000")

        assert calls == ["first", "second"]

    def test_malformed_color_touches_nothing(self, bmp_dir, engine):
        with pytest.raises(FormatError):
            engine.make_transparent("#XYZ")
        assert not (bmp_dir / "a.png").exists()

    def test_corrupt_bitmap_aborts_batch(self, tmp_path, engine, recorder):
        (tmp_path / "bad.bmp").write_bytes(b"not a bitmap")
        engine.made_transparent.subscribe(recorder)

        with pytest.raises(DecodeError):
            engine.make_transparent("#FF0000")

        assert not (tmp_path / "bad.png").exists()
        assert not (tmp_path / "bad.png.tmp").exists()
        assert recorder.events == []

    def test_listener_exception_aborts_batch(self, bmp_dir, engine, rgb_image, write_image):
        write_image(bmp_dir / "b.bmp", rgb_image(3, 3), format="BMP")
        calls = []

        def failing(event):
            calls.append(event)
            raise RuntimeError("stop")

        engine.made_transparent.subscribe(failing)

        with pytest.raises(RuntimeError, match="stop"):
            engine.make_transparent("#FF0000")
        assert len(calls) == 1

    def test_missing_working_path(self, tmp_path):
        engine = ImageEngine(working_path=tmp_path / "missing")
        with pytest.raises(FileNotFoundError):
            engine.make_transparent("#FF0000")

    def test_unset_working_path(self):
        with pytest.raises(ConfigurationError):
            ImageEngine().make_transparent("#FF0000")


class TestResize:
    """Test in-place resizing of exact-size PNGs"""

    def test_mixed_sizes_scenario(self, png_tree, engine, recorder):
        small = png_tree / "x" / "img.png"
        large = png_tree / "y" / "img.png"
        large_before = large.read_bytes()
        engine.image_resized.subscribe(recorder)

        count = engine.resize(Dimensions(width=16, height=16), Dimensions(width=8, height=8))

        assert count == 1
        assert recorder.events == [ImageResizedEvent(small, 16, 16, 8, 8)]
        with Image.open(small) as image:
            assert image.size == (8, 8)
        assert large.read_bytes() == large_before

    def test_no_temp_files_left(self, png_tree, engine):
        engine.resize("16x16", "8x8")
        assert list(png_tree.rglob("*.tmp")) == []

    def test_accepts_strings_and_tuples(self, png_tree, engine, recorder):
        engine.image_resized.subscribe(recorder)

        engine.resize("32x32", (4, 2))

        assert recorder.events[0].new_dims == "4x2"
        with Image.open(png_tree / "y" / "img.png") as image:
            assert image.size == (4, 2)

    def test_nearest_neighbour_content(self, png_tree, engine):
        engine.resize("16x16", "8x8")

        pixels = _read_rgba(png_tree / "x" / "img.png")
        assert np.all(pixels[:4, :4, :3] == (0, 0, 255))
        assert np.all(pixels[4:, :, :3] == (255, 0, 0))
        assert np.all(pixels[:, 4:, :3] == (255, 0, 0))

    def test_16bit_grayscale_keeps_tone(self, tmp_path, engine, recorder, write_image):
        path = write_image(tmp_path / "deep.png", np.full((16, 16), 40000, dtype=np.uint16))
        engine.image_resized.subscribe(recorder)

        engine.resize("16x16", "8x8")

        assert len(recorder.events) == 1
        pixels = _read_rgba(path)
        assert pixels.shape == (8, 8, 4)
        assert np.all(pixels[..., :3] == 156)
        assert np.all(pixels[..., 3] == 255)

    def test_dpi_preserved(self, png_tree, engine):
        engine.resize("16x16", "8x8")

        with Image.open(png_tree / "x" / "img.png") as image:
            assert image.info["dpi"] == pytest.approx((72, 72), abs=0.1)

    def test_nothing_matches(self, png_tree, engine, recorder):
        before = {p: p.read_bytes() for p in png_tree.rglob("*.png")}
        engine.image_resized.subscribe(recorder)

        assert engine.resize("10x10", "5x5") == 0

        assert recorder.events == []
        assert {p: p.read_bytes() for p in png_tree.rglob("*.png")} == before

    def test_malformed_dimensions_touch_nothing(self, png_tree, engine, recorder):
        before = {p: p.read_bytes() for p in png_tree.rglob("*.png")}
        engine.image_resized.subscribe(recorder)

        with pytest.raises(FormatError):
            engine.resize("16x16", "abcx8")

        assert recorder.events == []
        assert {p: p.read_bytes() for p in png_tree.rglob("*.png")} == before

    def test_corrupt_png_aborts_batch(self, tmp_path, engine):
        (tmp_path / "bad.png").write_bytes(b"\x89PNG broken")
        with pytest.raises(DecodeError):
            engine.resize("16x16", "8x8")

    def test_encode_failure_keeps_original(self, png_tree, engine, recorder, monkeypatch):
        small = png_tree / "x" / "img.png"
        before = small.read_bytes()
        engine.image_resized.subscribe(recorder)

        def failing_encode(raster, path, format="PNG"):
            path.write_bytes(b"partial")
            raise EncodeError(path, "disk full")

        monkeypatch.setattr("services.image_engine.encode", failing_encode)

        with pytest.raises(EncodeError):
            engine.resize("16x16", "8x8")

        assert small.read_bytes() == before
        assert not (png_tree / "x" / "img.png.tmp").exists()
        assert recorder.events == []

    def test_rename_failure_keeps_original(self, png_tree, engine, monkeypatch):
        small = png_tree / "x" / "img.png"
        before = small.read_bytes()

        def failing_replace(src, dst):
            raise PermissionError("locked")

        monkeypatch.setattr("services.image_engine.os.replace", failing_replace)

        with pytest.raises(PermissionError):
            engine.resize("16x16", "8x8")

        assert small.read_bytes() == before
        assert list(png_tree.rglob("*.tmp")) == []

    def test_working_path_can_change(self, png_tree, engine, recorder):
        engine.working_path = str(png_tree / "y")
        engine.image_resized.subscribe(recorder)

        engine.resize("16x16", "8x8")

        assert recorder.events == []
