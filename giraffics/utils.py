import numpy as np


def vec(list):
    """Handy shorthand to make a double-precision float array."""
    return np.array(list, dtype=np.float64)


def normalize(v):
    """Return a unit vector in the direction of the vector v."""
    return v / np.linalg.norm(v)


def frame_pixels(frame, width, height):
    """View a flat RGBA8 framebuffer as a (height, width, 4) array without copying."""
    pixels = np.frombuffer(frame, dtype=np.uint8) if not isinstance(frame, np.ndarray) else frame
    if pixels.size != width * height * 4:
        raise ValueError("Frame holds %d bytes, expected %d" % (pixels.size, width * height * 4))
    return pixels.reshape(height, width, 4)


def read_text(path):
    """Read a UTF-8 text file."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()
