import numpy as np

from .coords import CanvasCoordinate, canvas_to_screen


class Canvas:
    """The pixel grid a scene is rendered onto.

    Canvases never change size; resizing produces a new Canvas.
    """

    def __init__(self, width, height):
        """Create a canvas of the given size in pixels.

        Parameters:
          width : int -- number of columns, at least 1
          height : int -- number of rows, at least 1
        """
        if width < 1 or height < 1:
            raise ValueError("Canvas dimensions must be positive, got %dx%d" % (width, height))
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def frame_size(self):
        """Number of bytes in an RGBA framebuffer for this canvas."""
        return self._width * self._height * 4

    def __eq__(self, other):
        if not isinstance(other, Canvas):
            return NotImplemented
        return (self._width, self._height) == (other._width, other._height)

    def __hash__(self):
        return hash((self._width, self._height))

    def __repr__(self):
        return "Canvas(%d, %d)" % (self._width, self._height)

    def resized(self, width, height):
        return Canvas(width, height)

    def create_frame(self):
        """Allocate a zeroed RGBA8 framebuffer, row-major from the top left."""
        return np.zeros(self.frame_size, dtype=np.uint8)

    def to_screen(self, coord):
        return canvas_to_screen(coord, self._width, self._height)

    def contains(self, coord):
        return self.to_screen(coord).on_screen

    def rows(self):
        """Canvas y of each framebuffer row, from the top row down."""
        top = self._height // 2
        return range(top, top - self._height, -1)

    def columns(self):
        """Canvas x of each framebuffer column, from the left."""
        left = -(self._width // 2)
        return range(left, left + self._width)

    def iter_row(self, y):
        for x in self.columns():
            yield CanvasCoordinate(x, y)

    def iter_pixels(self):
        """Every canvas coordinate that lands on screen, in scan order."""
        for y in self.rows():
            yield from self.iter_row(y)

    __iter__ = iter_pixels

    def put_pixel(self, frame, coord, color):
        """Write color into frame at coord; off-screen coordinates are ignored.

        frame may be a numpy uint8 array or any writable byte buffer
        (bytearray, memoryview).
        """
        screen = self.to_screen(coord)
        if screen.on_screen:
            index = (screen.y * self._width + screen.x) * 4
            if isinstance(frame, np.ndarray):
                frame[index:index + 4] = color.channels
            else:
                frame[index:index + 4] = color.as_bytes()
