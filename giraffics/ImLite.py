from PIL import Image as PIM
import numpy as np

import matplotlib.pyplot as plt

from .utils import frame_pixels


class Image(object):
    """Image

    Thin wrapper around a (height, width, 4) RGBA8 pixel array, used to
    look at and save rendered frames.
    """

    def __init__(self, pixels=None):
        self._samples = None;
        self.pixels = pixels;

    @classmethod
    def FromFrame(cls, frame, width, height):
        """Wrap a flat RGBA8 framebuffer, sharing its memory."""
        return cls(pixels=frame_pixels(frame, width, height));

    @property
    def pixels(self):
        return self._samples;

    @pixels.setter
    def pixels(self, data):
        self._samples = data;

    @property
    def width(self):
        return self.pixels.shape[1];

    @property
    def height(self):
        return self.pixels.shape[0];

    def PIL(self):
        return PIM.fromarray(np.ascontiguousarray(self.pixels, dtype=np.uint8));

    def show(self, title=None, new_figure=True, **kwargs):
        Image.Show(self, title=title, new_figure=new_figure, **kwargs);
        plt.show();

    @staticmethod
    def Show(im, title=None, new_figure=True, axis=None, **kwargs):
        """Draw a rendered frame with matplotlib; does not block."""
        if (isinstance(im, Image)):
            frame = im.pixels;
        else:
            frame = np.asarray(im);
        if (new_figure and axis is None):
            fig = plt.figure(num=title);
            axis = fig.add_subplot(1, 1, 1);
        elif (axis is None):
            axis = plt.gca();
        # frames come out of the renderer fully opaque; drop alpha for display
        axis.imshow(frame[:, :, 0:3], interpolation='nearest', **kwargs);
        axis.set_axis_off();
        if (title):
            axis.set_title(title);
        return axis;

    def writeToFile(self, output_path=None, **kwargs):
        self.PIL().save(output_path, **kwargs);
