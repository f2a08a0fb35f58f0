from io import IOBase
from typing import List, Optional, Union

import numpy as np

from .channels import bgra_to_rgba
from .config import Config
from .errors import TruncatedPixelData
from .header import SpriteHeader, parse_header
from .layout import check_frame_index, frame_slice, missing_pixels, strip_bytes

BytesLike = Union[bytes, bytearray, memoryview]


def decode_frame_array(
    data: BytesLike,
    header: Optional[SpriteHeader] = None,
    frame_index: int = 0,
    strict: Optional[bool] = None,
) -> np.ndarray:
    """
    Extract one frame in stored channel order.

    Args:
        data: Raw container bytes
        header: Parsed header (parsed from ``data`` when omitted)
        frame_index: 0-based frame index
        strict: Raise instead of zero-filling missing pixels
            (default: Config.STRICT_PIXEL_READS)

    Returns:
        uint8 array of shape (frame_height, frame_width, 4)
    """
    if header is None:
        header = parse_header(data)
    if strict is None:
        strict = Config.STRICT_PIXEL_READS
    check_frame_index(header, frame_index)

    if strict:
        missing = missing_pixels(header, frame_index, len(data))
        if missing:
            raise TruncatedPixelData(frame_index, missing, len(data))

    strip = strip_bytes(data, header)
    return np.ascontiguousarray(frame_slice(strip, header, frame_index))


def decode_frame(
    data: BytesLike,
    header: Optional[SpriteHeader] = None,
    frame_index: int = 0,
    strict: Optional[bool] = None,
) -> bytes:
    """
    Extract one frame as a flat pixel buffer of frame_width * frame_height * 4 bytes.

    Channel order is left as stored; use bgra_to_rgba for display. Pixels
    past the end of ``data`` come back as transparent black unless
    ``strict`` is set.
    """
    return decode_frame_array(data, header, frame_index, strict).tobytes()


def decode_all(
    data: BytesLike,
    header: Optional[SpriteHeader] = None,
    strict: Optional[bool] = None,
) -> List[bytes]:
    """Extract every frame, in index order."""
    if header is None:
        header = parse_header(data)
    return [
        decode_frame(data, header, frame_index, strict)
        for frame_index in range(header.frames)
    ]


def decode_image_array(data: BytesLike, header: Optional[SpriteHeader] = None) -> np.ndarray:
    """The whole strip as an RGBA array of shape (frame_height, total_width, 4)."""
    if header is None:
        header = parse_header(data)
    return bgra_to_rgba(strip_bytes(data, header))


def decode_image(data: BytesLike, header: Optional[SpriteHeader] = None) -> bytes:
    """
    Decode the whole strip for display.

    Unlike decode_frame, the result is converted to RGBA. Missing pixels
    are always zero-filled here.
    """
    return decode_image_array(data, header).tobytes()


class SpriteDecoder(object):
    @staticmethod
    def decode_file(file_path: str, debug: bool = False):
        with open(file_path, 'rb') as fp:
            return SpriteDecoder.decode_stream(fp, debug=debug)

    @staticmethod
    def decode_stream(fp: IOBase, debug: bool = False):
        """
        Read a sprite container from a binary stream.

        Returns:
            Sprite wrapping the bytes read

        Raises:
            SpriteError: The header is not a valid sprite header
        """
        from .sprite import Sprite

        data = fp.read()
        sprite = Sprite(data)
        if debug or Config.DEBUG_MODE:
            header = sprite.header
            print(
                f'Sprite {header.magic} v{header.version}: '
                f'{header.total_width}x{header.frame_height}, '
                f'{header.frames} frame(s) of {header.frame_width}x{header.frame_height}, '
                f'{len(data)} bytes'
            )
        return sprite
