"""Turning a scene into an image by ray tracing."""

from __future__ import annotations

import math
import os
from typing import Any, List, Union

from .color import Color
from .lights import Camera, Light
from .material import Material
from .pixel import Pixel
from .ppmwriter import PpmWriter
from .ray import Ray
from .shape import EPSILON, HitPoint
from .vector import Mat4, Vec3

PI = 3.14159265
_CHECKER_SIZE = 20


def _tone_map(color: Color) -> Color:
    return Color(
        color.r / (color.r + 1),
        color.g / (color.g + 1),
        color.b / (color.b + 1),
    )


def _normal_color(hit: HitPoint) -> Color:
    n = hit.surface_normal
    return Color((n.x + 1) / 2, (n.y + 1) / 2, (n.z + 1) / 2)


def _schlick_reflection_ratio(
    ray_dir: Vec3, normal: Vec3, ior: float, min_reflectance: float
) -> float:
    """Schlick's approximation, with the minimum taken from the material's glossiness."""
    n1, n2 = 1.0, ior
    cos_incoming = -normal.dot(ray_dir)
    if cos_incoming < 0:
        n1, n2 = n2, n1
    if n1 > n2:
        eta = n1 / n2
        sin_outgoing_squared = eta * eta * (1 - cos_incoming * cos_incoming)
        if sin_outgoing_squared >= 1:
            return 1.0
        cos_incoming = math.sqrt(1 - sin_outgoing_squared)
    factor = 1 - cos_incoming
    return min_reflectance + (1 - min_reflectance) * factor ** 5


class Renderer:
    """Renders scenes into a colour buffer and a PPM file.

    A scene is any object with ``root`` (a built composite), ``lights``
    (point lights) and ``ambient`` (a light).
    """

    def __init__(
        self,
        width: int,
        height: int,
        file_name: Union[str, os.PathLike],
        aa_steps: int,
        max_ray_bounces: int,
    ) -> None:
        if aa_steps < 1:
            raise ValueError("aa_steps must be at least 1")
        self.width = width
        self.height = height
        self.filename = file_name
        self.aa_steps = aa_steps
        self.max_ray_bounces = max_ray_bounces
        self._color_buffer: List[Color] = [Color() for _ in range(width * height)]
        self._ppm = PpmWriter(width, height)

    @property
    def color_buffer(self) -> List[Color]:
        return self._color_buffer

    def render_checkerboard(self) -> None:
        """Render a test pattern of coloured squares and save it."""
        for y in range(self.height):
            for x in range(self.width):
                if (x // _CHECKER_SIZE) % 2 != (y // _CHECKER_SIZE) % 2:
                    color = Color(0.0, 1.0, x / self.height)
                else:
                    color = Color(1.0, 0.0, y / self.width)
                self.write(Pixel(x, y, color))
        self._ppm.save(self.filename)

    def render(self, scene: Any, camera: Camera) -> None:
        """Trace every pixel of the scene as seen by the camera and save the image."""
        fov_radians = camera.fov_x / 180 * PI
        img_plane_dist = (self.width / 2.0) / math.tan(fov_radians / 2)
        u = camera.direction.cross(camera.up)
        v = u.cross(camera.direction)
        back = -camera.direction
        trans_mat = Mat4.from_columns(
            (u.x, u.y, u.z, 0.0),
            (v.x, v.y, v.z, 0.0),
            (back.x, back.y, back.z, 0.0),
            (camera.position.x, camera.position.y, camera.position.z, 1.0),
        )
        origin = camera.position
        aa_unit = 1.0 / self.aa_steps
        samples = [
            (xc * aa_unit, yc * aa_unit)
            for xc in range(self.aa_steps)
            for yc in range(self.aa_steps)
        ]
        half_w = self.width * 0.5
        half_h = self.height * 0.5

        for index in range(self.width * self.height):
            x, y = index % self.width, index // self.width
            color = Color()
            for dx, dy in samples:
                pixel_pos = Vec3(x + dx - half_w, y + dy - half_h, -img_plane_dist)
                direction = trans_mat.transform_direction(pixel_pos.normalized())
                color = color + _tone_map(self._trace_color(Ray(origin, direction), scene, 0))
            self.write(Pixel(x, y, color * (1.0 / len(samples))))
        self._ppm.save(self.filename)

    def write(self, pixel: Pixel) -> None:
        """Store a pixel in the colour buffer and the image."""
        if not (0 <= pixel.x < self.width and 0 <= pixel.y < self.height):
            raise IndexError(f"pixel ({pixel.x}, {pixel.y}) lies outside the image")
        self._color_buffer[self.width * pixel.y + pixel.x] = pixel.color
        self._ppm.write(pixel)

    def pixel_buffer(self) -> List[float]:
        """The colour buffer flattened to r, g, b floats per pixel."""
        return [channel for c in self._color_buffer for channel in (c.r, c.g, c.b)]

    def _closest_hit(self, ray: Ray, scene: Any) -> HitPoint:
        return scene.root.intersect(ray)

    def _light_is_blocked(
        self, position: Vec3, light_dir: Vec3, light_range: float, scene: Any
    ) -> bool:
        block = scene.root.intersect(Ray(position, light_dir.normalized()))
        return block.does_intersect and block.distance < light_range

    def _trace_color(self, ray: Ray, scene: Any, ray_bounces: int) -> Color:
        hit = self._closest_hit(ray, scene)
        return self._shade(hit, scene, ray_bounces) if hit.does_intersect else Color()

    @staticmethod
    def _material_of(hit: HitPoint) -> Material:
        if hit.hit_material is None:
            raise ValueError(f"shape {hit.hit_object!r} has no material")
        return hit.hit_material

    def _shade(self, hit: HitPoint, scene: Any, ray_bounces: int) -> Color:
        material = self._material_of(hit)
        shaded = self._ambient_color(hit, scene.ambient) + self._diffuse_color(hit, scene)

        if material.glossy > 0 and material.opacity < 1:
            reflectance = _schlick_reflection_ratio(
                hit.ray_direction, hit.surface_normal, material.ior, material.glossy
            )
            shaded = shaded * ((1 - reflectance) * material.opacity)
            shaded = shaded + self._reflection_color(hit, scene, ray_bounces) * reflectance
            shaded = shaded + self._refraction_color(hit, scene, ray_bounces) * (1 - reflectance)
            shaded = shaded + self._specular_color(hit, scene) * reflectance
        elif material.glossy > 0:
            reflectance = _schlick_reflection_ratio(
                hit.ray_direction, hit.surface_normal, material.ior, material.glossy
            )
            shaded = shaded * (1 - reflectance)
            shaded = shaded + self._reflection_color(hit, scene, ray_bounces) * reflectance
            shaded = shaded + self._specular_color(hit, scene) * reflectance
        elif material.opacity < 1:
            shaded = shaded * material.opacity
            shaded = shaded + self._refraction_color(hit, scene, ray_bounces) * (
                1 - material.opacity
            )
        return shaded

    def _ambient_color(self, hit: HitPoint, ambient: Light) -> Color:
        return ambient.color * ambient.brightness * self._material_of(hit).ka

    def _diffuse_color(self, hit: HitPoint, scene: Any) -> Color:
        material = self._material_of(hit)
        result = Color()
        for light in scene.lights:
            light_dir = light.position - hit.position
            if self._light_is_blocked(hit.position, light_dir, light_dir.length(), scene):
                continue
            cos_incidence = hit.surface_normal.dot(light_dir.normalized())
            if cos_incidence < 0:
                continue
            result = result + light.color * light.brightness * material.kd * cos_incidence
        return result

    def _specular_color(self, hit: HitPoint, scene: Any) -> Color:
        material = self._material_of(hit)
        result = Color()
        for light in scene.lights:
            light_dir = light.position - hit.position
            if self._light_is_blocked(hit.position, light_dir, light_dir.length(), scene):
                continue
            light_dir = light_dir.normalized()
            normal = hit.surface_normal
            reflected = normal * (2 * normal.dot(light_dir)) - light_dir
            cos_specular = reflected.dot(hit.ray_direction * -1.0)
            if cos_specular <= 0:
                continue
            result = result + light.color * light.brightness * material.ks * (
                cos_specular ** material.m
            )
        return result

    def _reflection_color(self, hit: HitPoint, scene: Any, ray_bounces: int) -> Color:
        if ray_bounces >= self.max_ray_bounces:
            return Color()
        ray_dir = hit.ray_direction
        normal = hit.surface_normal
        reflect_dir = ray_dir - normal * (2 * normal.dot(ray_dir))
        traced = self._trace_color(Ray(hit.position, reflect_dir), scene, ray_bounces + 1)
        return traced * self._material_of(hit).ks

    def _refraction_color(self, hit: HitPoint, scene: Any, ray_bounces: int) -> Color:
        material = self._material_of(hit)
        ray_dir = hit.ray_direction
        normal = hit.surface_normal
        eta = 1 / material.ior
        cos_incoming = -normal.dot(ray_dir)
        if cos_incoming < 0:
            eta = 1 / eta
            cos_incoming = -cos_incoming
            normal = -normal
        cos_outgoing_squared = 1 - eta * eta * (1 - cos_incoming * cos_incoming)
        if cos_outgoing_squared < 0:
            return self._reflection_color(hit, scene, ray_bounces)
        refract_dir = ray_dir * eta + normal * (eta * cos_incoming - math.sqrt(cos_outgoing_squared))
        refract_ray = Ray(hit.position - normal * (2 * EPSILON), refract_dir)
        traced = self._trace_color(refract_ray, scene, ray_bounces + 1)
        return traced * material.kd * (1 - material.opacity)