import contextlib
import io
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from PIL import Image

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT))

from ascim.cli import config_from_args, create_argument_parser, main
from ascim.constants import RenderMode


def run(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class ArgumentTests(unittest.TestCase):
    def test_short_options(self):
        args = create_argument_parser().parse_args(
            ["img.png", "-mw", "80", "-mh", "40", "-et", "1.5", "-cr", "2.5"]
        )
        self.assertEqual((args.max_width, args.max_height), (80, 40))
        self.assertEqual(args.edge_threshold, 1.5)
        self.assertEqual(args.char_ratio, 2.5)

    def test_config_from_args(self):
        args = create_argument_parser().parse_args(["img.png", "--categorical", "--no-edges"])
        with mock.patch("ascim.config.shutil.get_terminal_size",
                        return_value=os.terminal_size((90, 25))):
            cfg = config_from_args(args)
        self.assertEqual((cfg.max_width, cfg.max_height), (90, 25))
        self.assertEqual(cfg.render_mode, RenderMode.CATEGORICAL)
        self.assertIs(cfg.edge_detection, False)
        self.assertEqual(cfg.edge_threshold, 4.0)

    def test_plain_and_categorical_exclusive(self):
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                create_argument_parser().parse_args(["img.png", "--plain", "--categorical"])


class MainTests(unittest.TestCase):
    def test_no_input_prints_help(self):
        code, out, _ = run([])
        self.assertEqual(code, 1)
        self.assertIn("usage:", out)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, out, err = run([str(Path(tmp) / "missing.png"), "-mw", "8", "-mh", "8"])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Error loading image", err)

    def test_plain_output_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "white.png"
            dst = Path(tmp) / "art.txt"
            Image.new('RGB', (16, 8), (255, 255, 255)).save(src)
            code, out, _ = run([str(src), "-mw", "8", "-mh", "8", "--plain", "-o", str(dst)])
            text = dst.read_text(encoding="utf-8")
        self.assertEqual(code, 0)
        self.assertEqual(out, "")
        self.assertEqual(text, "@@@@@@@@\n@@@@@@@@\n")

    def test_true_color_stdout(self):
        with tempfile.TemporaryDirectory() as tmp:
            src = Path(tmp) / "black.png"
            Image.new('RGB', (16, 8), (0, 0, 0)).save(src)
            code, out, _ = run([str(src), "-mw", "8", "-mh", "8"])
        self.assertEqual(code, 0)
        self.assertIn("\x1b[38;2;0;0;0m \x1b[0m", out)
        self.assertEqual(out.count("\n"), 2)


if __name__ == "__main__":
    unittest.main()
