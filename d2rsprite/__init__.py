"""d2rsprite package entrypoints."""

from .channels import bgra_to_rgba, rgba_to_bgra
from .config import Config
from .errors import (
    BadMagic,
    DimensionMismatch,
    EmptyFrame,
    InvalidDimensions,
    SpriteError,
    TooSmall,
    TruncatedPixelData,
)
from .header import HeaderLayout, SpriteHeader, parse_header, parse_legacy_header
from .layout import frame_offsets, pixel_offset
from .sprite import Sprite
from .sprite_decoder import SpriteDecoder, decode_all, decode_frame, decode_image
from .sprite_encoder import build_header_bytes, encode, encode_frames

__version__ = "0.3.0"

__all__ = [
    'Sprite',
    'SpriteDecoder',
    'SpriteHeader',
    'HeaderLayout',
    'Config',
    'parse_header',
    'parse_legacy_header',
    'pixel_offset',
    'frame_offsets',
    'decode_frame',
    'decode_all',
    'decode_image',
    'encode',
    'encode_frames',
    'build_header_bytes',
    'bgra_to_rgba',
    'rgba_to_bgra',
    'SpriteError',
    'TooSmall',
    'BadMagic',
    'InvalidDimensions',
    'DimensionMismatch',
    'TruncatedPixelData',
    'EmptyFrame',
]
