"""
Pillow-backed rasterizers for GlyphField content.

Text and symbols are drawn white on a transparent background at device
scale 1.0, so the sampler sees opaque ink and bright colors. Images are
loaded as-is and converted to RGBA.
"""

import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .. import config
from .content import PixelBuffer, as_pixel_buffer

logger = logging.getLogger(__name__)

_font_cache = {}


def load_font(size, font_path=None):
    """
    Load a TrueType font at ``size``.

    Tries ``font_path`` first, then ``config.FONT_CANDIDATES``, then Pillow's
    bundled default font.
    """
    key = (font_path, int(size))
    if key in _font_cache:
        return _font_cache[key]

    candidates = [font_path] if font_path else []
    candidates += config.FONT_CANDIDATES
    font = None
    for candidate in candidates:
        try:
            font = ImageFont.truetype(candidate, int(size))
            break
        except OSError:
            continue
    if font is None:
        if font_path:
            logger.warning("Font %s not found, using Pillow default", font_path)
        font = ImageFont.load_default(size=int(size))

    _font_cache[key] = font
    return font


def _wrap_lines(draw, text, font, max_width):
    """Greedy word wrap of ``text`` so each line fits in ``max_width`` pixels."""
    lines = []
    for paragraph in text.split("\n"):
        words = paragraph.split(" ")
        current = ""
        for word in words:
            trial = word if not current else current + " " + word
            if current and draw.textlength(trial, font=font) > max_width:
                lines.append(current)
                current = word
            else:
                current = trial
        lines.append(current)
    return lines


def rasterize_text(text, font_size=config.TEXT_FONT_SIZE, frame_width=config.TEXT_FRAME_WIDTH,
                   font_path=None, color=config.TEXT_COLOR):
    """
    Render ``text`` centered inside a frame ``frame_width`` pixels wide.

    Long lines wrap on spaces. The frame height fits the wrapped block.

    Returns:
        PixelBuffer: the rendered RGBA8 image
    """
    font = load_font(font_size, font_path)
    scratch = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    wrapped = "\n".join(_wrap_lines(scratch, text, font, frame_width))

    left, top, right, bottom = scratch.multiline_textbbox((0, 0), wrapped, font=font, align="center")
    pad = max(1, int(font_size * 0.1))
    height = max(1, (bottom - top) + 2 * pad)

    image = Image.new("RGBA", (int(frame_width), int(height)), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    x = (frame_width - (right - left)) / 2 - left
    draw.multiline_text((x, pad - top), wrapped, font=font, fill=color, align="center")
    return PixelBuffer.from_array(np.asarray(image))


def rasterize_symbol(symbol, font_size=config.SYMBOL_FONT_SIZE, font_path=None,
                     color=config.TEXT_COLOR):
    """Render a single symbol glyph tightly cropped to its ink box."""
    font = load_font(font_size, font_path)
    scratch = ImageDraw.Draw(Image.new("RGBA", (1, 1)))
    left, top, right, bottom = scratch.textbbox((0, 0), symbol, font=font)
    width = max(1, right - left)
    height = max(1, bottom - top)

    image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    ImageDraw.Draw(image).text((-left, -top), symbol, font=font, fill=color)
    return PixelBuffer.from_array(np.asarray(image))


def rasterize_image(source):
    """
    Convert an image source to a PixelBuffer.

    Args:
        source: path to an image file, a PIL image, an (H, W, 4) array
            or an existing PixelBuffer

    Returns:
        PixelBuffer: RGBA8 pixels of the source
    """
    if isinstance(source, (str, Path)):
        with Image.open(source) as image:
            return as_pixel_buffer(image.convert("RGBA"))
    return as_pixel_buffer(source)


def centered_offset(canvas_size, buffer_size):
    """Placement offset that centers a buffer of ``buffer_size`` on the canvas."""
    canvas_w, canvas_h = canvas_size
    width, height = buffer_size
    return (canvas_w - width) / 2.0, (canvas_h - height) / 2.0
