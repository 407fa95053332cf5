"""
The three coordinate systems used while rendering.

World coordinates are real 3D vectors. Canvas coordinates are integer pixel
positions centered on the middle of the image with y pointing up. Screen
coordinates are integer pixel positions with the origin in the top left and
y pointing down. The types never mix; use the conversion functions.
"""
import numpy as np

from .utils import normalize, vec


class WorldCoordinate:
    """A position or direction in the 3D world, backed by a float64 array."""

    __slots__ = ("_v",)

    def __init__(self, x, y, z):
        self._v = vec([x, y, z])

    @classmethod
    def from_tuple(cls, t):
        x, y, z = t
        return cls(x, y, z)

    @classmethod
    def from_array(cls, v):
        coord = cls.__new__(cls)
        coord._v = vec(v)
        return coord

    @property
    def x(self):
        return float(self._v[0])

    @property
    def y(self):
        return float(self._v[1])

    @property
    def z(self):
        return float(self._v[2])

    def __add__(self, other):
        return WorldCoordinate.from_array(self._v + other._v)

    def __sub__(self, other):
        return WorldCoordinate.from_array(self._v - other._v)

    def __mul__(self, s):
        return WorldCoordinate.from_array(self._v * s)

    __rmul__ = __mul__

    def __truediv__(self, s):
        return WorldCoordinate.from_array(self._v / s)

    def __eq__(self, other):
        if not isinstance(other, WorldCoordinate):
            return NotImplemented
        return bool(np.array_equal(self._v, other._v))

    def __hash__(self):
        return hash(tuple(self))

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def __repr__(self):
        return "WorldCoordinate(%r, %r, %r)" % (self.x, self.y, self.z)

    def dot(self, other):
        return float(np.dot(self._v, other._v))

    def norm(self):
        """Euclidean length."""
        return float(np.linalg.norm(self._v))

    def normalized(self):
        return WorldCoordinate.from_array(normalize(self._v))

    def as_array(self):
        return self._v.copy()


ORIGIN = WorldCoordinate(0.0, 0.0, 0.0)


class CanvasCoordinate:
    """Integer pixel position centered on the image, y increasing upward."""

    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = int(x)
        self.y = int(y)

    def __eq__(self, other):
        if not isinstance(other, CanvasCoordinate):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((CanvasCoordinate, self.x, self.y))

    def __repr__(self):
        return "CanvasCoordinate(%d, %d)" % (self.x, self.y)


class ScreenCoordinate:
    """Pixel position in the framebuffer: either on screen or off it."""

    __slots__ = ()

    on_screen = False


class OnScreen(ScreenCoordinate):
    """A pixel inside the framebuffer, origin top left, y increasing downward."""

    __slots__ = ("x", "y")

    on_screen = True

    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __eq__(self, other):
        if not isinstance(other, OnScreen):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((OnScreen, self.x, self.y))

    def __repr__(self):
        return "OnScreen(%d, %d)" % (self.x, self.y)


class _OffScreen(ScreenCoordinate):

    __slots__ = ()

    def __repr__(self):
        return "OFF_SCREEN"


# Value for any position that falls outside the framebuffer
OFF_SCREEN = _OffScreen()


def canvas_to_screen(coord, width, height):
    """Map a canvas coordinate onto the framebuffer of the given size.

    Parameters:
      coord : CanvasCoordinate -- the position to convert
      width, height : int -- framebuffer size in pixels
    Return:
      ScreenCoordinate -- OnScreen(x, y), or OFF_SCREEN when out of bounds
    """
    x = width // 2 + coord.x
    # canvas y points up, screen y points down
    y = height // 2 - coord.y
    if x < 0 or y < 0 or x >= width or y >= height:
        return OFF_SCREEN
    return OnScreen(x, y)


def canvas_to_world(coord, viewport, width, height):
    """Project a canvas coordinate onto the viewport plane.

    The result is the direction of the ray from the camera through that
    pixel.
    """
    x = coord.x * (viewport.width / width)
    y = coord.y * (viewport.height / height)
    return WorldCoordinate(x, y, viewport.depth)
