"""
Core implementation of the ray tracer.
"""
import logging
import time
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .color import WHITE
from .coords import ORIGIN, canvas_to_world
from .geometry import Hit
from .utils import frame_pixels

logger = logging.getLogger(__name__)


class ViewPort:

    def __init__(self, width=1.0, height=1.0, depth=1.0):
        """Create the viewing window rays are shot through.

        Parameters:
          width, height : float -- size of the window in world units
          depth : float -- distance of the window in front of the camera
        """
        for name, value in (("width", width), ("height", height), ("depth", depth)):
            if not value > 0:
                raise ValueError("Viewport %s must be positive, got %r" % (name, value))
        self.width = float(width)
        self.height = float(height)
        self.depth = float(depth)

    def __eq__(self, other):
        if not isinstance(other, ViewPort):
            return NotImplemented
        return (self.width, self.height, self.depth) == (other.width, other.height, other.depth)

    def __repr__(self):
        return "ViewPort(%r, %r, %r)" % (self.width, self.height, self.depth)


def diffuse_intensity(light_vec, normal, intensity):
    """Cosine-weighted Lambertian term; zero when the surface faces away."""
    n_dot_l = normal.dot(light_vec)
    if n_dot_l <= 0:
        return 0.0
    return intensity * n_dot_l / (normal.norm() * light_vec.norm())


class AmbientLight:

    def __init__(self, intensity):
        """Create an ambient light of given intensity
        """
        self.intensity = intensity

    def illuminate(self, point, normal):
        """Ambient light reaches every point equally."""
        return self.intensity

    def __repr__(self):
        return "AmbientLight(%r)" % self.intensity


class PointLight:
    def __init__(self, position, intensity):
        """Create a point light at given position and with given intensity"""
        self.position = position
        self.intensity = intensity

    def illuminate(self, point, normal):
        """Compute the light intensity at a surface point due to this light.

        There is no falloff with distance, only the angle to the light counts.
        """
        return diffuse_intensity(self.position - point, normal, self.intensity)

    def __repr__(self):
        return "PointLight(%r, %r)" % (self.position, self.intensity)


class DirectionalLight:
    def __init__(self, direction, intensity):
        """Create a light shining from the given direction, like the sun.

        Parameters:
          direction : WorldCoordinate -- vector pointing towards the light
          intensity : float -- non-negative light strength
        """
        self.direction = direction
        self.intensity = intensity

    def illuminate(self, point, normal):
        return diffuse_intensity(self.direction, normal, self.intensity)

    def __repr__(self):
        return "DirectionalLight(%r, %r)" % (self.direction, self.intensity)


class Scene:

    def __init__(self, canvas, spheres=(), lights=(), viewport=None,
                 background_color=WHITE, title="Giraffics", camera_position=ORIGIN):
        """Create a scene containing the given objects.

        A Scene is built once and then only read: rendering never changes it,
        and resized() returns a new one.

        Parameters:
          canvas : Canvas -- output size in pixels
          spheres : sequence of Sphere -- in the order they were defined
          lights : sequence of lights -- anything with illuminate(point, normal)
          viewport : ViewPort -- defaults to a unit square at depth 1
          background_color : Color -- used where no sphere is hit
          title : str -- window title
          camera_position : WorldCoordinate -- where every ray starts
        """
        self.canvas = canvas
        self.spheres = tuple(spheres)
        self.lights = tuple(lights)
        self.viewport = viewport if viewport is not None else ViewPort()
        self.background_color = background_color
        self.title = title
        self.camera_position = camera_position

    def resized(self, width, height):
        """Return a copy of this scene rendering onto a canvas of a new size."""
        return Scene(self.canvas.resized(width, height), self.spheres, self.lights,
                     self.viewport, self.background_color, self.title, self.camera_position)

    def to_world(self, coord):
        """Ray direction through the given canvas coordinate."""
        return canvas_to_world(coord, self.viewport, self.canvas.width, self.canvas.height)

    def intersect(self, direction, t_min=1.0, t_max=np.inf):
        """Computes the first (smallest t) intersection between a camera ray and the scene.

        Parameters:
          direction : WorldCoordinate -- direction of the ray leaving the camera
          t_min, t_max : float -- only hits with t_min <= t <= t_max count
        Return:
          Hit, or None if nothing is hit. On equal t the sphere listed first wins.
        """
        closest_t = None
        closest_sphere = None
        for sphere in self.spheres:
            roots = sphere.intersect_ray(self.camera_position, direction)
            if roots is None:
                continue
            for t in roots:
                if t_min <= t <= t_max and (closest_t is None or t < closest_t):
                    closest_t = t
                    closest_sphere = sphere

        if closest_sphere is None:
            return None
        point = self.camera_position + direction * closest_t
        return Hit(closest_t, point, closest_sphere.normal_at(point), closest_sphere)

    def compute_lighting(self, point, normal):
        """Total light intensity arriving at a surface point."""
        return sum(light.illuminate(point, normal) for light in self.lights)

    def trace(self, direction, t_min=1.0, t_max=np.inf):
        """Color seen along a ray from the camera."""
        hit = self.intersect(direction, t_min, t_max)
        if hit is None:
            return self.background_color
        intensity = self.compute_lighting(hit.point, hit.normal)
        return hit.sphere.color.scale(intensity)

    def shade(self, coord):
        """Color of the pixel at a canvas coordinate."""
        return self.trace(self.to_world(coord))


def _render_row(scene, frame, y):
    canvas = scene.canvas
    for coord in canvas.iter_row(y):
        canvas.put_pixel(frame, coord, scene.shade(coord))


def render(scene, frame, workers=1):
    """
    Render the scene into a framebuffer.

    Every pixel of the canvas is written exactly once. The frame must hold
    width * height * 4 bytes (RGBA8, row-major, top-left origin); it is
    overwritten in place and never resized. With workers > 1 the rows are
    shared out over a thread pool; the result does not depend on which
    row finishes first.
    """
    canvas = scene.canvas
    if len(frame) != canvas.frame_size:
        raise ValueError("Frame holds %d bytes but a %dx%d canvas needs %d"
                         % (len(frame), canvas.width, canvas.height, canvas.frame_size))

    logger.info("rendering %dx%d frame with %d sphere(s) and %d light(s)",
                canvas.width, canvas.height, len(scene.spheres), len(scene.lights))
    start = time.perf_counter()

    if workers is None or workers <= 1:
        for y in canvas.rows():
            _render_row(scene, frame, y)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(_render_row, scene, frame, y) for y in canvas.rows()]
            for future in futures:
                future.result()

    logger.info("frame finished in %.2fs", time.perf_counter() - start)
    return frame


def render_image(scene, workers=1):
    """
    render a ray traced image.

    Returns an array of shape (height, width, 4) with dtype uint8.
    """
    frame = scene.canvas.create_frame()
    render(scene, frame, workers)
    return frame_pixels(frame, scene.canvas.width, scene.canvas.height)
