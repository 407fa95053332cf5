from .ImLite import Image
from .raytracer import render_image
from .scene import load_scene
from .sceneparser import (AmbientLightDef, DirectionLightDef, PointLightDef, SphereDef,
                          WindowDef, format_definitions)


class ExampleSceneDef(object):
    def __init__(self, definitions):
        self.definitions = list(definitions);

    def load(self, defaults=None):
        return load_scene(self.definitions, defaults);

    def to_text(self):
        """Scene file text for this example."""
        return format_definitions(self.definitions);

    def render(self, output_path=None, output_shape=None, workers=1):
        scene = self.load();
        if (output_shape is not None):
            scene = scene.resized(output_shape[1], output_shape[0]);
        im = Image(pixels=render_image(scene, workers));
        if (output_path is None):
            return im;
        else:
            im.writeToFile(output_path);


def TwoSpheresExample():
    return ExampleSceneDef([
        WindowDef(title="Two spheres", width=320, height=240),
        SphereDef(color=(180, 180, 100), center=(0, 0, 4), radius=1),
        SphereDef(color=(50, 50, 50), center=(0, -41, 4), radius=40),
        PointLightDef(intensity=0.8, position=(2, 3, 0)),
        AmbientLightDef(intensity=0.2),
    ])


def ThreeSpheresExample():
    return ExampleSceneDef([
        WindowDef(title="Three spheres", width=320, height=240),
        SphereDef(color=(255, 0, 0), center=(0, -1, 3), radius=1),
        SphereDef(color=(0, 0, 255), center=(2, 0, 4), radius=1),
        SphereDef(color=(0, 255, 0), center=(-2, 0, 4), radius=1),
        AmbientLightDef(intensity=0.2),
        PointLightDef(intensity=0.6, position=(2, 1, 0)),
        DirectionLightDef(intensity=0.2, direction=(1, 4, 4)),
    ])


def OrthoFriendlyExample(sphere_radius=0.25):
    # One small sphere straight ahead, flat ambient light
    return ExampleSceneDef([
        SphereDef(color=(128, 128, 128), center=(0, 0, 2), radius=sphere_radius),
        AmbientLightDef(intensity=0.5),
    ])
