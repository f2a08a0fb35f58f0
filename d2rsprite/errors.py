"""Exceptions raised by the sprite codec.

Every error is a ``ValueError`` so callers that only care about "bad
input" can catch that, while the ``code`` attribute gives a stable,
grep-friendly identifier.
"""

from typing import Optional, Tuple

ERR_TOO_SMALL = "ERR_TOO_SMALL"
ERR_BAD_MAGIC = "ERR_BAD_MAGIC"
ERR_INVALID_DIMENSIONS = "ERR_INVALID_DIMENSIONS"
ERR_DIMENSION_MISMATCH = "ERR_DIMENSION_MISMATCH"
ERR_TRUNCATED_PIXEL_DATA = "ERR_TRUNCATED_PIXEL_DATA"
ERR_EMPTY_FRAME = "ERR_EMPTY_FRAME"


class SpriteError(ValueError):
    """Base class for all sprite codec errors."""

    code = "ERR_SPRITE"

    def __init__(self, msg: str = "") -> None:
        super().__init__(msg or self.code)


class TooSmall(SpriteError):
    """The buffer cannot hold the header fields."""

    code = ERR_TOO_SMALL

    def __init__(self, size: int, required: int) -> None:
        super().__init__(
            f"File too small to contain valid D2R sprite header: {size} bytes, need at least {required}"
        )
        self.size = size
        self.required = required


class BadMagic(SpriteError):
    """The first four bytes are not a known sprite signature."""

    code = ERR_BAD_MAGIC

    def __init__(self, found: bytes, expected: Tuple[bytes, ...]) -> None:
        expected_text = " or ".join(repr(tag.decode('ascii')) for tag in expected)
        super().__init__(
            f"Invalid D2R sprite magic: expected {expected_text}, got {found!r}"
        )
        self.found = bytes(found)
        self.expected = expected


class InvalidDimensions(SpriteError):
    code = ERR_INVALID_DIMENSIONS

    def __init__(self, width: int, height: int, limit: int) -> None:
        super().__init__(
            f"Invalid dimensions: {width}x{height} (each must be in 1..{limit})"
        )
        self.width = width
        self.height = height
        self.limit = limit


class DimensionMismatch(SpriteError):
    """Replacement pixels do not match the geometry stored in the header."""

    code = ERR_DIMENSION_MISMATCH

    def __init__(
        self,
        expected: Tuple[int, int],
        actual: Tuple[int, int],
        detail: Optional[str] = None,
    ) -> None:
        msg = (
            f"Image dimensions ({actual[0]}x{actual[1]}) don't match original sprite "
            f"({expected[0]}x{expected[1]})"
        )
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.expected = expected
        self.actual = actual


class TruncatedPixelData(SpriteError):
    """Raised by strict decoding when the payload ends before the frame does."""

    code = ERR_TRUNCATED_PIXEL_DATA

    def __init__(self, frame_index: int, missing_pixels: int, size: int) -> None:
        super().__init__(
            f"Frame {frame_index} is missing {missing_pixels} pixels (buffer is {size} bytes)"
        )
        self.frame_index = frame_index
        self.missing_pixels = missing_pixels
        self.size = size


class EmptyFrame(SpriteError):
    """More frames than strip columns: every frame is 0 pixels wide and has no image."""

    code = ERR_EMPTY_FRAME

    def __init__(self, frame_index: int, total_width: int, frames: int) -> None:
        super().__init__(
            f"Frame {frame_index} is empty: {frames} frames do not fit a "
            f"{total_width} pixel wide strip"
        )
        self.frame_index = frame_index
        self.total_width = total_width
        self.frames = frames
