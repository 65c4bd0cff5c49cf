import numpy as np
import pytest
from PIL import Image

from glyphfield import config
from glyphfield.core.content import (
    DrawableContent,
    PixelBuffer,
    SymbolContent,
    TextContent,
    depth_multiplier_for,
)
from glyphfield.core.rasterize import (
    centered_offset,
    rasterize_image,
    rasterize_symbol,
    rasterize_text,
)
from glyphfield.core.sampler import sample_targets
from glyphfield.errors import EmptySourceError


def opaque_count(buffer):
    return int(np.count_nonzero(buffer.alpha >= config.ALPHA_THRESHOLD))


def test_text_fills_fixed_width_frame():
    buffer = rasterize_text("Hello", font_size=40)

    assert buffer.width == config.TEXT_FRAME_WIDTH
    assert buffer.height > 0
    assert opaque_count(buffer) > 0
    assert buffer.data[:, :, :3].max() == 255


def test_long_text_wraps_to_more_lines():
    one = rasterize_text("word", font_size=40, frame_width=300)
    many = rasterize_text("word " * 30, font_size=40, frame_width=300)

    assert many.width == one.width == 300
    assert many.height > one.height


def test_symbol_is_cropped_to_ink():
    buffer = rasterize_symbol("M", font_size=60)

    assert 0 < buffer.width < 200 and 0 < buffer.height < 200
    assert opaque_count(buffer) > 0


def test_empty_text_has_nothing_to_sample():
    buffer = rasterize_text("", font_size=30)
    with pytest.raises(EmptySourceError):
        sample_targets(buffer, count=10)


def test_image_file_round_trip(tmp_path):
    path = tmp_path / "dot.png"
    image = Image.new("RGBA", (5, 4), (0, 0, 0, 0))
    image.putpixel((2, 1), (10, 20, 30, 255))
    image.save(path)

    buffer = rasterize_image(str(path))

    assert buffer.size == (5, 4)
    assert tuple(buffer.data[1, 2]) == (10, 20, 30, 255)


def test_rgb_image_becomes_opaque():
    buffer = rasterize_image(Image.new("RGB", (3, 3), (255, 0, 0)))
    assert opaque_count(buffer) == 9


def test_centered_offset():
    assert centered_offset((1000, 600), (800, 100)) == (100.0, 250.0)
    assert centered_offset((100, 100), (300, 50)) == (-100.0, 25.0)


def test_content_descriptors():
    assert depth_multiplier_for(TextContent("a")) == config.TEXT_DEPTH_MULTIPLIER
    assert depth_multiplier_for(SymbolContent("a")) == config.TEXT_DEPTH_MULTIPLIER
    assert depth_multiplier_for(DrawableContent(None)) == config.DEFAULT_DEPTH_MULTIPLIER
    assert depth_multiplier_for(object()) == config.DEFAULT_DEPTH_MULTIPLIER

    assert isinstance(TextContent("Hi", font_size=30).rasterize(), PixelBuffer)


def test_drawable_accepts_rasterizable_and_arrays(red_dot):
    nested = DrawableContent(SymbolContent("X", font_size=40))
    assert opaque_count(nested.rasterize()) > 0

    buffer = DrawableContent(red_dot).rasterize()
    assert buffer.size == (2, 2)
