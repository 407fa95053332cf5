"""Command line entry point: load a scene file and render it."""
import argparse
import logging
import os
import sys

from .ImLite import Image
from .raytracer import render as render_frame
from .scene import load_scene_file
from .sceneparser import SceneError

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog="giraffics",
                                     description="Render a scene of lit spheres")
    parser.add_argument("scene_file", type=str, help="Path to the scene file")
    parser.add_argument("-o", "--output", type=str, default=None,
                        help="PNG file to write (default: <scene name>.png)")
    parser.add_argument("--show", action="store_true",
                        help="Display the rendered frame in a window")
    parser.add_argument("--width", type=int, default=None,
                        help="Override the canvas width from the scene file")
    parser.add_argument("--height", type=int, default=None,
                        help="Override the canvas height from the scene file")
    parser.add_argument("--workers", type=int, default=1,
                        help="Number of rendering threads")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    return parser


def default_output_path(scene_file):
    stem, _ = os.path.splitext(os.path.basename(scene_file))
    return stem + ".png"


def render(scene, output_path=None, show=False, workers=1):
    """Render a loaded scene, then save and/or display the frame."""
    canvas = scene.canvas
    frame = render_frame(scene, canvas.create_frame(), workers)
    im = Image.FromFrame(frame, canvas.width, canvas.height)
    if output_path is not None:
        im.writeToFile(output_path)
        logger.info("saved %s", output_path)
    if show:
        im.show(title=scene.title)
    return im


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        scene = load_scene_file(args.scene_file)
    except SceneError as e:
        logger.error("%s", e)
        return 1

    if args.width is not None or args.height is not None:
        width = args.width if args.width is not None else scene.canvas.width
        height = args.height if args.height is not None else scene.canvas.height
        if width < 1 or height < 1:
            logger.error("Canvas size must be positive, got %dx%d", width, height)
            return 1
        scene = scene.resized(width, height)

    output_path = args.output
    if output_path is None and not args.show:
        output_path = default_output_path(args.scene_file)
    render(scene, output_path, args.show, args.workers)
    return 0


if __name__ == "__main__":
    sys.exit(main())
