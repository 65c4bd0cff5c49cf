"""
Content descriptors and pixel buffers for GlyphField.

A content descriptor says *what* the particles should draw: a text string,
a single symbol glyph, or any drawable that can rasterize itself. The
sampler only needs two things from it: an RGBA8 pixel buffer and a depth
multiplier.
"""

from dataclasses import dataclass
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from .. import config
from ..errors import InvalidDimensionsError


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """
    Row-major RGBA8 image, shape (height, width, 4), device scale 1.0.

    Channels are straight (not premultiplied) alpha; the sampler's alpha
    threshold is applied to the fourth channel as stored.
    """

    data: np.ndarray

    @classmethod
    def from_array(cls, array):
        """Wrap an (H, W, 4) array, converting it to uint8."""
        arr = np.asarray(array)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise InvalidDimensionsError(
                f"Expected an (height, width, 4) RGBA array, got shape {arr.shape}"
            )
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        return cls(np.ascontiguousarray(arr))

    @classmethod
    def from_bytes(cls, raw, width, height):
        """Wrap a raw RGBA8 byte string of ``width * height * 4`` bytes."""
        width, height = int(width), int(height)
        if width < 0 or height < 0:
            raise InvalidDimensionsError(f"Negative buffer size {width}x{height}")
        flat = np.frombuffer(bytes(raw), dtype=np.uint8)
        if flat.size != width * height * 4:
            raise InvalidDimensionsError(
                f"Buffer holds {flat.size} bytes, expected {width * height * 4} "
                f"for {width}x{height} RGBA8"
            )
        return cls(flat.reshape(height, width, 4))

    @property
    def width(self) -> int:
        return int(self.data.shape[1])

    @property
    def height(self) -> int:
        return int(self.data.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def alpha(self) -> np.ndarray:
        return self.data[:, :, 3]


def as_pixel_buffer(pixels) -> PixelBuffer:
    """Accept a PixelBuffer, an RGBA ndarray or a PIL image."""
    if isinstance(pixels, PixelBuffer):
        return pixels
    if hasattr(pixels, "convert") and hasattr(pixels, "mode"):
        # PIL image
        return PixelBuffer.from_array(np.asarray(pixels.convert("RGBA")))
    return PixelBuffer.from_array(pixels)


@runtime_checkable
class Rasterizable(Protocol):
    """Anything that can be rasterized to an RGBA8 buffer of known size."""

    def rasterize(self) -> PixelBuffer:
        ...


@dataclass(frozen=True)
class TextContent:
    """A text string, drawn in a bold font inside a fixed-width frame."""

    text: str
    font_size: int = config.TEXT_FONT_SIZE
    frame_width: int = config.TEXT_FRAME_WIDTH
    font_path: Optional[str] = None
    depth_multiplier: float = config.TEXT_DEPTH_MULTIPLIER

    def rasterize(self) -> PixelBuffer:
        from .rasterize import rasterize_text
        return rasterize_text(self.text, font_size=self.font_size,
                              frame_width=self.frame_width, font_path=self.font_path)


@dataclass(frozen=True)
class SymbolContent:
    """A single symbol glyph, such as an icon-font codepoint."""

    symbol: str
    font_size: int = config.SYMBOL_FONT_SIZE
    font_path: Optional[str] = None
    depth_multiplier: float = config.TEXT_DEPTH_MULTIPLIER

    def rasterize(self) -> PixelBuffer:
        from .rasterize import rasterize_symbol
        return rasterize_symbol(self.symbol, font_size=self.font_size, font_path=self.font_path)


@dataclass(frozen=True, eq=False)
class DrawableContent:
    """
    Arbitrary drawable content.

    ``drawable`` may be any Rasterizable, a PIL image, an (H, W, 4) array
    or a path to an image file.
    """

    drawable: Any
    depth_multiplier: float = config.DEFAULT_DEPTH_MULTIPLIER

    def rasterize(self) -> PixelBuffer:
        if isinstance(self.drawable, Rasterizable):
            return self.drawable.rasterize()
        from .rasterize import rasterize_image
        return rasterize_image(self.drawable)


def depth_multiplier_for(content) -> float:
    """Depth multiplier for a content descriptor (1.0 when it has none)."""
    return float(getattr(content, "depth_multiplier", config.DEFAULT_DEPTH_MULTIPLIER))
