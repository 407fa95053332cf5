import os
import shutil
import tempfile
import unittest

from PIL import Image as PIM

from giraffics.cli import build_parser, default_output_path, main

SCENE = """\
window {
title = "Tiny"
width = 4
height = 3
}
light {
type = ambient
intensity = 1
}
sphere {
color = (255, 0, 0)
center = (0, 0, 3)
radius = 1
}
"""


class TestMain(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def write(self, name, text):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def test_missing_file(self):
        self.assertEqual(main([os.path.join(self.tmpdir, "missing.scene")]), 1)

    def test_bad_scene(self):
        path = self.write("bad.scene", "sphere {\nradius = 1\n}\n")
        self.assertEqual(main([path]), 1)

    def test_renders_png(self):
        scene = self.write("tiny.scene", SCENE)
        out = os.path.join(self.tmpdir, "out.png")
        self.assertEqual(main([scene, "-o", out, "--width", "8", "--height", "6"]), 0)
        with PIM.open(out) as im:
            self.assertEqual(im.size, (8, 6))
            # the sphere fills the middle of the frame
            self.assertEqual(im.getpixel((4, 3)), (255, 0, 0, 255))

    def test_size_from_scene_file(self):
        scene = self.write("tiny.scene", SCENE)
        out = os.path.join(self.tmpdir, "out.png")
        self.assertEqual(main([scene, "--output", out, "--workers", "2"]), 0)
        with PIM.open(out) as im:
            self.assertEqual(im.size, (4, 3))

    def test_bad_size_override(self):
        scene = self.write("tiny.scene", SCENE)
        out = os.path.join(self.tmpdir, "out.png")
        self.assertEqual(main([scene, "-o", out, "--width", "0"]), 1)
        self.assertFalse(os.path.exists(out))

    def test_no_arguments(self):
        with self.assertRaises(SystemExit) as cm:
            build_parser().parse_args([])
        self.assertEqual(cm.exception.code, 2)

    def test_default_output_path(self):
        self.assertEqual(default_output_path("scenes/demo.scene"), "demo.png")
        self.assertEqual(default_output_path("demo"), "demo.png")


if __name__ == '__main__':
    unittest.main()
