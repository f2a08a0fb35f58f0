from struct import Struct
from typing import Optional, Sequence, Tuple, Union

import numpy as np

from .errors import DimensionMismatch
from .header import HeaderLayout, SpriteHeader

BytesLike = Union[bytes, bytearray, memoryview]
Pixels = Union[BytesLike, np.ndarray]

# Typed header fields, written one by one so the bytes between them survive
_magic_version_struct = Struct('<4sH')  # offset 0
_strip_size_struct = Struct('<ii')  # offset 8: total width, frame height
_frame_count_struct = Struct('<I')  # offset 20
_legacy_struct = Struct(SpriteHeader.legacy_header_format)  # offset 0


def build_header_bytes(header: SpriteHeader, original_header_bytes: Optional[BytesLike] = None) -> bytes:
    """
    Build the 40 byte header region for ``header``.

    The region starts as a copy of the original header when one at least
    40 bytes long is given (zeros otherwise), then the typed fields are
    written over it. Bytes that are not typed fields are kept verbatim.
    """
    size = header.header_size
    if original_header_bytes is not None and len(original_header_bytes) >= size:
        out = bytearray(original_header_bytes[:size])
    else:
        out = bytearray(size)

    magic = header.magic.encode('ascii')
    if header.layout == HeaderLayout.LEGACY:
        _legacy_struct.pack_into(
            out, 0, magic, header.version, header.total_width, header.frame_height
        )
    else:
        _magic_version_struct.pack_into(out, 0, magic, header.version)
        _strip_size_struct.pack_into(out, 8, header.total_width, header.frame_height)
        _frame_count_struct.pack_into(out, 20, header.frame_count)
    return bytes(out)


def _pixel_array(
    pixels: Pixels,
    expected: Tuple[int, int],
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> np.ndarray:
    """Validate a pixel buffer against ``expected`` (width, height) and return it as an array."""
    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise TypeError(f"Pixel array must be uint8, got {pixels.dtype}")
        if pixels.ndim != 3 or pixels.shape[2] != 4:
            raise ValueError(f"Pixel array must have shape (height, width, 4), got {pixels.shape}")
        actual = (pixels.shape[1], pixels.shape[0])
        if (width is not None and width != actual[0]) or (height is not None and height != actual[1]):
            raise ValueError(
                f"Declared size {width}x{height} contradicts array shape {pixels.shape}"
            )
        if actual != expected:
            raise DimensionMismatch(expected, actual)
        return pixels

    actual = (
        expected[0] if width is None else width,
        expected[1] if height is None else height,
    )
    if actual != expected:
        raise DimensionMismatch(expected, actual)

    required = actual[0] * actual[1] * 4
    if len(pixels) != required:
        raise DimensionMismatch(
            expected, actual, f"pixel buffer is {len(pixels)} bytes, expected {required}"
        )
    return np.frombuffer(pixels, dtype=np.uint8).reshape(actual[1], actual[0], 4)


def encode(
    original_header_bytes: Optional[BytesLike],
    header: SpriteHeader,
    pixels: Pixels,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> bytes:
    """
    Reassemble a container from replacement pixels.

    Args:
        original_header_bytes: Bytes of the original file (at least its
            first 40 bytes), used to carry over unknown header bytes
        header: Header of the original sprite
        pixels: Stored-order (BGRA) pixels covering the whole strip, as a
            flat buffer or a (height, width, 4) uint8 array
        width: Declared width of the replacement image
        height: Declared height of the replacement image

    Returns:
        40 byte header followed by the pixel payload, nothing else

    Raises:
        DimensionMismatch: The replacement does not have the stored geometry
    """
    expected = (header.total_width, header.frame_height)
    array = _pixel_array(pixels, expected, width, height)
    return build_header_bytes(header, original_header_bytes) + np.ascontiguousarray(array).tobytes()


def encode_frames(
    original_header_bytes: Optional[BytesLike],
    header: SpriteHeader,
    frames: Sequence[Pixels],
) -> bytes:
    """
    Stitch per-frame stored-order pixels back into the strip and encode it.

    Frame ``i`` fills columns [i * frame_width, (i + 1) * frame_width).
    Columns left over by an uneven split of the strip stay zero.
    """
    frame_width = header.frame_width
    frame_height = header.frame_height
    if len(frames) != header.frames:
        raise DimensionMismatch(
            (header.total_width, frame_height),
            (frame_width * len(frames), frame_height),
            f"got {len(frames)} frames, expected {header.frames}",
        )

    strip = np.zeros((frame_height, header.total_width, 4), dtype=np.uint8)
    for frame_index, frame in enumerate(frames):
        start = frame_index * frame_width
        strip[:, start:start + frame_width] = _pixel_array(frame, (frame_width, frame_height))
    return encode(original_header_bytes, header, strip)
