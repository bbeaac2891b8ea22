import sys
import tempfile
import unittest
from pathlib import Path

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from ascim.exceptions import DecodeFailure, InvalidDimensions
from ascim.image_loader import (
    ImageData,
    compute_target_size,
    load_and_resize_image,
    make_grayscale,
    resize_rgba,
)


class TargetSizeTests(unittest.TestCase):
    def test_wide_image_fills_width(self):
        self.assertEqual(compute_target_size(100, 50, 64, 48, 2.0), (64, 16))

    def test_tall_image_fills_height(self):
        self.assertEqual(compute_target_size(50, 100, 64, 48, 2.0), (48, 48))

    def test_fractional_height_is_floored(self):
        self.assertEqual(compute_target_size(30, 20, 10, 10, 2.0), (10, 3))

    def test_fractional_width_is_floored(self):
        self.assertEqual(compute_target_size(10, 30, 64, 7, 2.0), (4, 7))

    def test_collapsed_grid_rejected(self):
        with self.assertRaises(InvalidDimensions):
            compute_target_size(1000, 1, 10, 10, 2.0)

    def test_invalid_settings_rejected(self):
        with self.assertRaises(InvalidDimensions):
            compute_target_size(10, 10, 0, 10, 2.0)
        with self.assertRaises(InvalidDimensions):
            compute_target_size(10, 10, 10, 10, 0.0)


class ImageDataTests(unittest.TestCase):
    def test_buffer_length_checked(self):
        with self.assertRaises(InvalidDimensions):
            ImageData(2, 2, bytes(15))
        with self.assertRaises(InvalidDimensions):
            ImageData(0, 2, b'')

    def test_pixels_are_read_only(self):
        data = ImageData(2, 1, bytes([1, 2, 3, 4, 5, 6, 7, 8]))
        pixels = data.pixels()
        self.assertEqual(pixels.shape, (1, 2, 4))
        self.assertEqual(pixels[0, 1, 2], 7)
        with self.assertRaises(ValueError):
            pixels[0, 0, 0] = 9

    def test_normalized_once(self):
        data = ImageData(1, 1, bytes([255, 51, 0, 255]))
        rgb = data.normalized_rgb()
        self.assertAlmostEqual(rgb[0, 0, 0], 1.0)
        self.assertAlmostEqual(rgb[0, 0, 1], 0.2)
        self.assertEqual(rgb[0, 0, 2], 0.0)

    def test_from_image_converts_mode(self):
        data = ImageData.from_image(Image.new('L', (3, 2), 128))
        self.assertEqual((data.width, data.height), (3, 2))
        self.assertEqual(data.data[:4], bytes([128, 128, 128, 255]))


class GrayscaleTests(unittest.TestCase):
    def test_bt709_weights(self):
        data = ImageData(4, 1, bytes([
            255, 255, 255, 255,
            255, 0, 0, 255,
            0, 255, 0, 255,
            0, 0, 0, 255,
        ]))
        gray = make_grayscale(data)
        self.assertEqual(gray.shape, (1, 4))
        self.assertAlmostEqual(gray[0, 0], 1.0)
        self.assertAlmostEqual(gray[0, 1], 0.2126)
        self.assertAlmostEqual(gray[0, 2], 0.7152)
        self.assertEqual(gray[0, 3], 0.0)


class ResizeTests(unittest.TestCase):
    def test_alpha_is_not_premultiplied(self):
        img = Image.new('RGBA', (2, 1))
        img.putpixel((0, 0), (255, 0, 0, 255))
        img.putpixel((1, 0), (0, 0, 255, 0))
        r, g, b, a = resize_rgba(img, (1, 1)).getpixel((0, 0))
        # Straight averaging keeps the transparent pixel's blue
        self.assertTrue(125 <= r <= 130, r)
        self.assertTrue(125 <= b <= 130, b)
        self.assertEqual(g, 0)
        self.assertTrue(125 <= a <= 130, a)

    def test_converts_source_mode(self):
        resized = resize_rgba(Image.new('P', (8, 8), 0), (4, 2))
        self.assertEqual(resized.mode, 'RGBA')
        self.assertEqual(resized.size, (4, 2))


class LoadTests(unittest.TestCase):
    def test_load_and_resize(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "wide.png"
            Image.new('RGB', (100, 50), (255, 0, 0)).save(path)
            data = load_and_resize_image(path, 64, 48, 2.0)
        self.assertEqual((data.width, data.height), (64, 16))
        self.assertEqual(len(data.data), 64 * 16 * 4)

    def test_palette_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "palette.gif"
            Image.new('P', (40, 40), 3).save(path)
            data = load_and_resize_image(str(path), 10, 10, 2.0)
        self.assertEqual((data.width, data.height), (10, 5))

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.png"
            with self.assertRaises(DecodeFailure) as ctx:
                load_and_resize_image(path, 10, 10, 2.0)
        self.assertEqual(ctx.exception.path, str(path))

    def test_not_an_image(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.png"
            path.write_text("not an image", encoding="utf-8")
            with self.assertRaises(DecodeFailure):
                load_and_resize_image(path, 10, 10, 2.0)


if __name__ == "__main__":
    unittest.main()
