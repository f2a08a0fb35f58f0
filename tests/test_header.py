"""Header parsing: signatures, bounds, frame geometry."""

import unittest

from d2rsprite import (
    BadMagic,
    Config,
    HeaderLayout,
    InvalidDimensions,
    SpriteError,
    SpriteHeader,
    TooSmall,
    parse_header,
    parse_legacy_header,
)
from d2rsprite.errors import ERR_BAD_MAGIC, ERR_INVALID_DIMENSIONS, ERR_TOO_SMALL

from tests.sprite_fixtures import (
    FIXTURE_1171x1505_1_FRAME,
    FIXTURE_1862x15_1_FRAME,
    FIXTURE_315x80_4_FRAMES,
    FIXTURE_88x20_51_FRAMES,
    make_header,
    make_legacy_header,
)


class TestFixtureGeometry(unittest.TestCase):
    def test_four_frame_strip(self):
        header = parse_header(make_header(*FIXTURE_315x80_4_FRAMES))
        self.assertEqual(header.magic, 'SpA1')
        self.assertEqual(header.frames, 4)
        self.assertEqual(header.frame_height, 80)
        self.assertEqual(header.total_width, 1263)
        self.assertEqual(header.frame_width, 315)
        self.assertEqual(header.pixel_data_offset, 40)

    def test_fifty_one_frame_strip(self):
        header = parse_header(make_header(*FIXTURE_88x20_51_FRAMES))
        self.assertEqual(header.frames, 51)
        self.assertEqual(header.frame_height, 20)
        self.assertEqual(header.frame_width, 88)

    def test_large_single_frame(self):
        header = parse_header(make_header(*FIXTURE_1171x1505_1_FRAME, magic=b'SPa1'))
        self.assertEqual(header.magic, 'SPa1')
        self.assertEqual(header.frames, 1)
        self.assertEqual(header.frame_height, 1505)
        self.assertEqual(header.total_width, 1171)
        self.assertEqual(header.frame_width, 1171)

    def test_narrow_single_frame(self):
        header = parse_header(make_header(*FIXTURE_1862x15_1_FRAME))
        self.assertEqual(header.frames, 1)
        self.assertEqual(header.frame_width, 1862)

    def test_even_split(self):
        header = parse_header(make_header(400, 50, 5))
        self.assertEqual(header.frame_width, 80)
        self.assertEqual(header.frames, 5)

    def test_uneven_split_truncates(self):
        header = parse_header(make_header(10, 2, 3))
        self.assertEqual(header.frame_width, 3)

    def test_zero_frame_count_means_one(self):
        header = parse_header(make_header(64, 32, 0))
        self.assertEqual(header.frame_count, 0)
        self.assertEqual(header.frames, 1)
        self.assertEqual(header.frame_width, 64)

    def test_version_and_layout(self):
        header = parse_header(make_header(8, 8, version=7))
        self.assertEqual(header.version, 7)
        self.assertEqual(header.layout, HeaderLayout.STRIP)

    def test_sizes(self):
        header = parse_header(make_header(12, 5, 3))
        self.assertEqual(header.stride, 48)
        self.assertEqual(header.payload_size, 12 * 5 * 4)
        self.assertEqual(header.frame_size, 4 * 5 * 4)

    def test_accepts_any_bytes_like(self):
        raw = make_header(16, 16, 2)
        self.assertEqual(parse_header(bytearray(raw)), parse_header(raw))
        self.assertEqual(parse_header(memoryview(raw)), parse_header(raw))

    def test_only_header_region_is_read(self):
        raw = make_header(16, 16) + b'\xff' * 3
        self.assertEqual(parse_header(raw).total_width, 16)


class TestHeaderErrors(unittest.TestCase):
    def test_too_small(self):
        with self.assertRaises(TooSmall) as ctx:
            parse_header(bytes(20))
        self.assertEqual(ctx.exception.size, 20)
        self.assertEqual(ctx.exception.required, 40)
        self.assertEqual(ctx.exception.code, ERR_TOO_SMALL)
        self.assertIn("too small", str(ctx.exception))

    def test_short_header_with_all_fields_needs_override(self):
        raw = make_header(16, 16, 2)[:24]
        with self.assertRaises(TooSmall):
            parse_header(raw)
        self.assertEqual(parse_header(raw, min_size=24).frames, 2)

    def test_bad_magic(self):
        raw = bytearray(make_header(100, 100))
        raw[0:4] = b'XXXX'
        with self.assertRaises(BadMagic) as ctx:
            parse_header(bytes(raw))
        self.assertEqual(ctx.exception.found, b'XXXX')
        self.assertEqual(ctx.exception.code, ERR_BAD_MAGIC)
        self.assertIn("Invalid D2R sprite magic", str(ctx.exception))

    def test_magic_is_case_sensitive(self):
        with self.assertRaises(BadMagic):
            parse_header(make_header(8, 8, magic=b'spa1'))

    def test_zero_width(self):
        with self.assertRaises(InvalidDimensions) as ctx:
            parse_header(make_header(0, 100))
        self.assertEqual(ctx.exception.width, 0)
        self.assertEqual(ctx.exception.code, ERR_INVALID_DIMENSIONS)
        self.assertIn("Invalid dimensions", str(ctx.exception))

    def test_negative_height(self):
        with self.assertRaises(InvalidDimensions):
            parse_header(make_header(100, -1))

    def test_upper_bound(self):
        header = parse_header(make_header(16384, 16384, 1))
        self.assertEqual(header.total_width, 16384)
        self.assertEqual(header.frame_height, 16384)
        with self.assertRaises(InvalidDimensions) as ctx:
            parse_header(make_header(16385, 10))
        self.assertEqual(ctx.exception.limit, Config.MAX_DIMENSION)

    def test_bound_override(self):
        with self.assertRaises(InvalidDimensions):
            parse_header(make_header(5000, 10), max_dimension=Config.LEGACY_MAX_DIMENSION)

    def test_errors_are_value_errors(self):
        for raw in (bytes(10), b'XXXX' + bytes(36), make_header(0, 0)):
            with self.assertRaises(ValueError):
                parse_header(raw)
            with self.assertRaises(SpriteError):
                parse_header(raw)


class TestLegacyHeader(unittest.TestCase):
    def test_reads_u16_fields(self):
        header = parse_legacy_header(make_legacy_header(64, 32, version=2))
        self.assertEqual(header.layout, HeaderLayout.LEGACY)
        self.assertEqual(header.version, 2)
        self.assertEqual(header.total_width, 64)
        self.assertEqual(header.frame_height, 32)
        self.assertEqual(header.frames, 1)
        self.assertEqual(header.frame_width, 64)

    def test_sixteen_bytes_is_enough(self):
        header = parse_legacy_header(make_legacy_header(4, 4)[:16])
        self.assertEqual(header.total_width, 4)
        with self.assertRaises(TooSmall):
            parse_legacy_header(make_legacy_header(4, 4)[:15])

    def test_tighter_bound(self):
        parse_legacy_header(make_legacy_header(4096, 4096))
        with self.assertRaises(InvalidDimensions) as ctx:
            parse_legacy_header(make_legacy_header(4097, 10))
        self.assertEqual(ctx.exception.limit, 4096)

    def test_bad_magic(self):
        with self.assertRaises(BadMagic):
            parse_legacy_header(make_legacy_header(4, 4, magic=b'ABCD'))


class TestSpriteHeader(unittest.TestCase):
    def test_magic_from_bytes(self):
        header = SpriteHeader(b'SPa1', 1, 10, 10)
        self.assertEqual(header.magic, 'SPa1')

    def test_equality(self):
        self.assertEqual(SpriteHeader('SpA1', 1, 10, 10, 2), SpriteHeader(b'SpA1', 1, 10, 10, 2))
        self.assertNotEqual(SpriteHeader('SpA1', 1, 10, 10, 2), SpriteHeader('SpA1', 1, 10, 10, 1))

    def test_repr(self):
        self.assertIn("total_width=10", repr(SpriteHeader('SpA1', 1, 10, 4)))

    def test_hashable(self):
        headers = {SpriteHeader('SpA1', 1, 10, 10, 2), SpriteHeader(b'SpA1', 1, 10, 10, 2)}
        self.assertEqual(len(headers), 1)
        self.assertIn(parse_header(make_header(10, 10, 2)), headers)


if __name__ == "__main__":
    unittest.main()
