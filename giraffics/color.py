import numpy as np

from .utils import vec


def _to_bytes(values):
    """Truncate real channel values into bytes, clamping at 0 and 255; NaN becomes 0."""
    values = np.nan_to_num(vec(values), nan=0.0)
    return np.clip(values, 0, 255).astype(np.uint8)


class Color:
    """An RGBA color with one byte per channel.

    Arithmetic saturates instead of wrapping, so channels always stay in
    [0, 255].
    """

    __slots__ = ("channels",)

    def __init__(self, red, green, blue, alpha=255):
        self.channels = tuple(int(c) for c in _to_bytes([red, green, blue, alpha]))

    @classmethod
    def rgb(cls, red, green, blue):
        return cls(red, green, blue, 255)

    @classmethod
    def rgba(cls, red, green, blue, alpha):
        return cls(red, green, blue, alpha)

    @classmethod
    def from_rgb_tuple(cls, t):
        """Build an opaque color from three real channel values."""
        red, green, blue = t
        return cls(red, green, blue, 255)

    @property
    def red(self):
        return self.channels[0]

    @property
    def green(self):
        return self.channels[1]

    @property
    def blue(self):
        return self.channels[2]

    @property
    def alpha(self):
        return self.channels[3]

    def scale(self, scalar):
        """Scale the color channels by scalar, keeping alpha."""
        rgb = vec(self.channels[0:3]) * scalar
        return Color(rgb[0], rgb[1], rgb[2], self.alpha)

    __mul__ = scale
    __rmul__ = scale

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return self.channels == other.channels

    def __hash__(self):
        return hash(self.channels)

    def __repr__(self):
        return "Color.rgba(%d, %d, %d, %d)" % self.channels

    def as_bytes(self):
        return bytes(self.channels)

    def as_array(self):
        return np.array(self.channels, np.uint8)


RED = Color.rgb(255, 0, 0)
GREEN = Color.rgb(0, 255, 0)
BLUE = Color.rgb(0, 0, 255)
BLACK = Color.rgb(0, 0, 0)
WHITE = Color.rgb(255, 255, 255)
