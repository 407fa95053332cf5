"""Scene loading: definitions in, an immutable Scene out."""
import logging

from .canvas import Canvas
from .color import WHITE
from .coords import ORIGIN, WorldCoordinate
from .geometry import Sphere
from .raytracer import AmbientLight, DirectionalLight, PointLight, Scene, ViewPort
from .sceneparser import (AmbientLightDef, DirectionLightDef, PointLightDef, SceneError,
                          SphereDef, WindowDef, parse)
from .utils import read_text

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 1000
DEFAULT_HEIGHT = 700
DEFAULT_TITLE = "Giraffics"


class SceneFileError(SceneError):
    """The scene file could not be read."""


class SceneDefaults:

    def __init__(self, width=DEFAULT_WIDTH, height=DEFAULT_HEIGHT, title=DEFAULT_TITLE,
                 background_color=WHITE, viewport=None, camera_position=ORIGIN):
        """Values used for anything the scene file does not set.

        Parameters:
          width, height : int -- canvas size in pixels
          title : str -- window title
          background_color : Color -- color where rays hit nothing
          viewport : ViewPort -- defaults to a unit square at depth 1
          camera_position : WorldCoordinate -- origin of every ray
        """
        self.width = width
        self.height = height
        self.title = title
        self.background_color = background_color
        self.viewport = viewport if viewport is not None else ViewPort()
        self.camera_position = camera_position


def light_from_definition(definition):
    if isinstance(definition, AmbientLightDef):
        return AmbientLight(definition.intensity)
    if isinstance(definition, PointLightDef):
        return PointLight(WorldCoordinate.from_tuple(definition.position), definition.intensity)
    if isinstance(definition, DirectionLightDef):
        return DirectionalLight(WorldCoordinate.from_tuple(definition.direction),
                                definition.intensity)
    raise TypeError("Not a light definition: %r" % (definition,))


def load_scene(definitions, defaults=None):
    """Build a Scene from parsed definitions.

    Window blocks are applied in order, so a later block overrides the
    fields an earlier one set. Spheres and lights keep their file order.
    """
    if defaults is None:
        defaults = SceneDefaults()

    width, height, title = defaults.width, defaults.height, defaults.title
    spheres = []
    lights = []
    for definition in definitions:
        if isinstance(definition, WindowDef):
            if definition.title is not None:
                title = definition.title
            if definition.width is not None:
                width = int(definition.width)
            if definition.height is not None:
                height = int(definition.height)
        elif isinstance(definition, SphereDef):
            spheres.append(Sphere.from_definition(definition))
        else:
            lights.append(light_from_definition(definition))

    logger.info("loaded scene %r: %dx%d, %d sphere(s), %d light(s)",
                title, width, height, len(spheres), len(lights))
    return Scene(Canvas(width, height), spheres, lights, viewport=defaults.viewport,
                 background_color=defaults.background_color, title=title,
                 camera_position=defaults.camera_position)


def load_scene_text(text, defaults=None):
    return load_scene(parse(text), defaults)


def load_scene_file(path, defaults=None):
    """Read, parse and load a scene file. Raises SceneError on any failure."""
    if not path:
        raise SceneFileError("No scene file given")
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise SceneFileError("Could not read scene file %s: %s" % (path, e)) from e
    logger.debug("read %d characters from %s", len(text), path)
    return load_scene_text(text, defaults)
