import numpy as np

from .color import Color
from .coords import WorldCoordinate


class Hit:
    def __init__(self, t, point, normal, sphere):
        """Create a Hit with the given data.

        Parameters:
          t : float -- the t value of the intersection along the ray
          point : WorldCoordinate -- the 3D point where the intersection happens
          normal : WorldCoordinate -- the outward-facing unit normal at the hit point
          sphere : Sphere -- the surface that was hit
        """
        self.t = t
        self.point = point
        self.normal = normal
        self.sphere = sphere

    def __repr__(self):
        return "Hit(t=%r, point=%r)" % (self.t, self.point)


class Sphere:

    def __init__(self, center, radius, color):
        """Create a sphere with the given center and radius.

        Parameters:
          center : WorldCoordinate -- the sphere's center
          radius : float -- the sphere's radius, positive
          color : Color -- the surface color before lighting
        """
        if not radius > 0:
            raise ValueError("Sphere radius must be positive, got %r" % radius)
        self.center = center
        self.radius = float(radius)
        self.color = color

    def __repr__(self):
        return "Sphere(%r, %r, %r)" % (self.center, self.radius, self.color)

    def intersect_ray(self, origin, direction):
        """Solve for where the ray origin + t * direction crosses this sphere.

        Parameters:
          origin : WorldCoordinate -- start of the ray (the camera)
          direction : WorldCoordinate -- ray direction, need not be unit length
        Return:
          (t1, t2) with t1 = (-b + sqrt(disc)) / 2a, or None when the ray misses
        """
        sphere_vec = origin - self.center
        a = direction.dot(direction)
        b = 2 * sphere_vec.dot(direction)
        c = sphere_vec.dot(sphere_vec) - self.radius * self.radius
        discriminant = b * b - 4 * a * c
        if discriminant < 0:
            return None
        disc_sqrt = np.sqrt(discriminant)
        plus = (-b + disc_sqrt) / (2 * a)
        minus = (-b - disc_sqrt) / (2 * a)
        return plus, minus

    def normal_at(self, point):
        """Unit normal pointing out of the sphere at a point on its surface."""
        normal = point - self.center
        return normal / normal.norm()

    @classmethod
    def from_definition(cls, definition):
        return cls(WorldCoordinate.from_tuple(definition.center), definition.radius,
                   Color.from_rgb_tuple(definition.color))
