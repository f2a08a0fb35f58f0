import unittest

import numpy as np

from d2rsprite import bgra_to_rgba, rgba_to_bgra


class TestChannelOrder(unittest.TestCase):
    def test_swaps_red_and_blue(self):
        self.assertEqual(bgra_to_rgba(bytes([1, 2, 3, 4])), bytes([3, 2, 1, 4]))
        self.assertEqual(rgba_to_bgra(bytes([3, 2, 1, 4])), bytes([1, 2, 3, 4]))

    def test_multiple_pixels(self):
        buf = bytes([10, 20, 30, 40, 50, 60, 70, 80])
        self.assertEqual(bgra_to_rgba(buf), bytes([30, 20, 10, 40, 70, 60, 50, 80]))

    def test_inverse(self):
        buf = bytes(range(256))
        self.assertEqual(bgra_to_rgba(rgba_to_bgra(buf)), buf)
        self.assertEqual(rgba_to_bgra(bgra_to_rgba(buf)), buf)

    def test_empty(self):
        self.assertEqual(bgra_to_rgba(b''), b'')

    def test_bytes_like_inputs(self):
        buf = bytes([1, 2, 3, 4])
        self.assertEqual(bgra_to_rgba(bytearray(buf)), bytes([3, 2, 1, 4]))
        self.assertEqual(bgra_to_rgba(memoryview(buf)), bytes([3, 2, 1, 4]))

    def test_rejects_unaligned_length(self):
        with self.assertRaises(ValueError):
            bgra_to_rgba(bytes(7))
        with self.assertRaises(ValueError):
            rgba_to_bgra(bytes(5))

    def test_array_input(self):
        arr = np.array([[[1, 2, 3, 4], [5, 6, 7, 8]]], dtype=np.uint8)
        out = bgra_to_rgba(arr)
        np.testing.assert_array_equal(out, [[[3, 2, 1, 4], [7, 6, 5, 8]]])
        # Input is left alone
        np.testing.assert_array_equal(arr[0, 0], [1, 2, 3, 4])

    def test_array_needs_four_channels(self):
        with self.assertRaises(ValueError):
            bgra_to_rgba(np.zeros((2, 2, 3), dtype=np.uint8))


if __name__ == "__main__":
    unittest.main()
