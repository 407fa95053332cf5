from .sceneparser import (Definition, WindowDef, AmbientLightDef, PointLightDef,
                          DirectionLightDef, SphereDef, SceneError, LexError,
                          SceneSyntaxError, SemanticError, parse, format_definitions)
from .coords import (WorldCoordinate, CanvasCoordinate, ScreenCoordinate, OnScreen,
                     OFF_SCREEN, ORIGIN, canvas_to_screen, canvas_to_world)
from .color import Color
from .canvas import Canvas
from .geometry import Sphere, Hit
from .raytracer import (ViewPort, AmbientLight, PointLight, DirectionalLight, Scene,
                        render, render_image)
from .scene import (SceneDefaults, SceneFileError, load_scene, load_scene_text,
                    load_scene_file)

__version__ = "0.1.0"
