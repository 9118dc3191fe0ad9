"""Scenes and loading them from scene description files."""

from __future__ import annotations

import math
import os
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Deque, Dict, Iterator, List, Optional, Sequence, Union

from .box import Box
from .color import Color
from .composite import Composite
from .lights import Camera, Light, PointLight
from .material import Material
from .renderer import Renderer
from .shape import Shape
from .sphere import Sphere
from .triangle import Triangle
from .vector import Vec3

PathLike = Union[str, os.PathLike]


@dataclass
class Scene:
    """Materials, shapes, lights and the camera of one scene."""

    materials: Dict[str, Material] = field(default_factory=dict)
    root: Composite = field(default_factory=lambda: Composite("root"))
    lights: List[PointLight] = field(default_factory=list)
    ambient: Light = field(default_factory=Light)
    camera: Camera = field(default_factory=Camera)

    def find_mat(self, name: str) -> Optional[Material]:
        return self.materials.get(name)

    def find_shape(self, name: str) -> Optional[Shape]:
        return self.root.find_child(name)


class _Args:
    """The whitespace-separated words of one line, consumed left to right."""

    def __init__(self, text: str) -> None:
        self._tokens: Deque[str] = deque(text.split())

    def word(self) -> str:
        if not self._tokens:
            raise ValueError("missing argument")
        return self._tokens.popleft()

    def number(self, default: Optional[float] = None) -> float:
        if not self._tokens and default is not None:
            return default
        token = self.word()
        try:
            return float(token)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None

    def integer(self) -> int:
        token = self.word()
        try:
            return int(token)
        except ValueError:
            raise ValueError(f"expected an integer, got {token!r}") from None

    def vec(self) -> Vec3:
        return Vec3(self.number(), self.number(), self.number())

    def remaining(self) -> Iterator[str]:
        while self._tokens:
            yield self._tokens.popleft()


def _lines(path: PathLike) -> Iterator[_Args]:
    """Yield the arguments of every line that is not a comment."""
    with open(path) as handle:
        for line in handle:
            if line.startswith("#"):
                continue
            yield _Args(line)


def _require_material(scene: Scene, name: str) -> Material:
    material = scene.find_mat(name)
    if material is None:
        raise KeyError(f"unknown material {name!r}")
    return material


def _require_shape(scene: Scene, name: str) -> Shape:
    shape = scene.find_shape(name)
    if shape is None:
        raise KeyError(f"unknown shape {name!r}")
    return shape


def _load_material(args: _Args) -> Material:
    defaults = Material()
    name = args.word()
    ka = args.vec()
    kd = args.vec()
    ks = args.vec()
    m = args.number()
    glossy = args.number(defaults.glossy)
    opacity = args.number(defaults.opacity)
    ior = args.number(defaults.ior)
    return Material(name, ka, kd, ks, m, glossy, opacity, ior)


def load_material(line: str) -> Material:
    """Parse "name ka(3) kd(3) ks(3) m [glossy opacity ior]" into a material."""
    return _load_material(_Args(line))


def _load_box(args: _Args, scene: Scene) -> Box:
    name = args.word()
    minimum = args.vec()
    maximum = args.vec()
    material = _require_material(scene, args.word())
    return Box(minimum, maximum, name, material)


def _load_sphere(args: _Args, scene: Scene) -> Sphere:
    name = args.word()
    center = args.vec()
    radius = args.number()
    material = _require_material(scene, args.word())
    return Sphere(radius, center, name, material)


def _load_triangle(args: _Args, scene: Scene) -> Triangle:
    name = args.word()
    v0, v1, v2 = args.vec(), args.vec(), args.vec()
    material = _require_material(scene, args.word())
    return Triangle(v0, v1, v2, name, material)


def _load_point_light(args: _Args) -> PointLight:
    name = args.word()
    position = args.vec()
    color = Color(args.number(), args.number(), args.number())
    brightness = args.number()
    return PointLight(name, color, brightness, position)


def _load_ambient(args: _Args) -> Light:
    name = args.word()
    # The ambient colour is given in r, b, g order.
    r = args.number()
    b = args.number()
    g = args.number()
    brightness = args.number()
    return Light(name, Color(r, g, b), brightness)


def _load_camera(args: _Args) -> Camera:
    name = args.word()
    fov_x = args.number()
    position = args.vec()
    direction = args.vec()
    up = args.vec()
    return Camera(name, fov_x, position, direction.normalized(), up.normalized())


def _load_transformation(args: _Args, scene: Scene) -> None:
    shape = _require_shape(scene, args.word())
    kind = next(args.remaining(), "")
    if kind == "translate":
        shape.translate(args.number(), args.number(), args.number())
    elif kind == "rotate":
        pitch, yaw, roll = args.number(), args.number(), args.number()
        shape.rotate(math.radians(roll), math.radians(pitch), math.radians(yaw))
    elif kind == "scale":
        shape.scale(args.number(), args.number(), args.number())


def add_obj_materials(file_path: PathLike, scene: Scene) -> None:
    """Add the materials of a .mtl file to the scene."""
    current: Optional[Material] = None
    for args in _lines(file_path):
        token = next(args.remaining(), "")
        if token == "newmtl":
            current = Material(name=args.word())
            scene.materials.setdefault(current.name, current)
            continue
        if token not in ("Ka", "Kd", "Ks", "Ns", "d", "Ni"):
            continue
        if current is None:
            raise ValueError(f"material property {token!r} before newmtl")
        if token == "Ka":
            current.ka = args.vec()
        elif token == "Kd":
            current.kd = args.vec()
        elif token == "Ks":
            current.ks = args.vec()
        elif token == "Ns":
            current.m = args.number()
        elif token == "d":
            current.opacity = args.number()
        else:
            ior = args.number()
            current.ior = ior
            current.glossy = ((1 - ior) / (1 + ior)) ** 2


def _vertex(items: Sequence[Vec3], index: int, kind: str) -> Vec3:
    if not 1 <= index <= len(items):
        raise IndexError(f"{kind} index {index} out of range")
    return items[index - 1]


def _load_obj_face(
    args: _Args,
    vertices: Sequence[Vec3],
    normals: Sequence[Vec3],
    name: str,
    material: Optional[Material],
) -> Triangle:
    vertex_indices: List[int] = []
    normal_indices: List[int] = []
    for _ in range(3):
        group = args.word().split("/")
        vertex_indices.append(int(group[0]))
        if len(group) >= 3 and group[2]:
            normal_indices.append(int(group[2]))
    v0, v1, v2 = (_vertex(vertices, i, "vertex") for i in vertex_indices)
    normal = _vertex(normals, normal_indices[0], "normal") if normal_indices else None
    return Triangle(v0, v1, v2, name, material, normal=normal)


def load_obj(directory_path: PathLike, name: str, scene: Scene) -> Composite:
    """Load directory_path/name.obj as a composite of triangle faces.

    Material libraries it names are added to the scene.
    """
    directory = Path(directory_path)
    composite = Composite(name, None)
    child_material: Optional[Material] = Material()
    vertices: List[Vec3] = []
    normals: List[Vec3] = []
    face_count = 0

    for args in _lines(directory / f"{name}.obj"):
        token = next(args.remaining(), "")
        if token == "mtllib":
            add_obj_materials(directory / args.word(), scene)
        elif token == "v":
            vertices.append(args.vec())
        elif token == "vn":
            normals.append(args.vec())
        elif token == "usemtl":
            child_material = _require_material(scene, args.word())
        elif token == "f":
            composite.add_child(
                _load_obj_face(args, vertices, normals, f"face{face_count}", child_material)
            )
            face_count += 1
    composite.build_octree()
    return composite


def _move_into(composite: Composite, names: Iterator[str], scene: Scene) -> None:
    for child_name in names:
        composite.add_child(_require_shape(scene, child_name))
        scene.root.remove_child(child_name)
    composite.build_octree()


def _create_composite(args: _Args, scene: Scene) -> None:
    composite = Composite(args.word())
    _move_into(composite, args.remaining(), scene)
    scene.root.add_child(composite)


def _add_to_composite(args: _Args, scene: Scene) -> None:
    name = args.word()
    composite = _require_shape(scene, name)
    if not isinstance(composite, Composite):
        raise TypeError(f"{name} cannot be cast to composite")
    _move_into(composite, args.remaining(), scene)


def _add_to_scene(args: _Args, scene: Scene, resource_directory: PathLike) -> None:
    token = next(args.remaining(), "")
    if token == "material":
        material = _load_material(args)
        scene.materials.setdefault(material.name, material)
    elif token == "shape":
        kind = next(args.remaining(), "")
        if kind == "box":
            scene.root.add_child(_load_box(args, scene))
        elif kind == "sphere":
            scene.root.add_child(_load_sphere(args, scene))
        elif kind == "triangle":
            scene.root.add_child(_load_triangle(args, scene))
        elif kind == "obj":
            scene.root.add_child(load_obj(resource_directory, args.word(), scene))
        elif kind == "composite":
            _create_composite(args, scene)
    elif token == "light":
        scene.lights.append(_load_point_light(args))
    elif token == "ambient":
        scene.ambient = _load_ambient(args)
    elif token == "camera":
        scene.camera = _load_camera(args)


def _render(args: _Args, scene: Scene, output_directory: PathLike) -> None:
    file_name = args.word()
    res_x = args.integer()
    res_y = args.integer()
    aa_steps = args.integer()
    ray_bounces = args.integer()
    renderer = Renderer(res_x, res_y, Path(output_directory) / file_name, aa_steps, ray_bounces)
    renderer.render(scene, scene.camera)


def load_scene(
    file_path: PathLike,
    resource_directory: PathLike,
    output_directory: PathLike,
) -> Scene:
    """Build a scene from a description file, rendering where it says so."""
    scene = Scene()
    for args in _lines(file_path):
        token = next(args.remaining(), "")
        if token == "define":
            _add_to_scene(args, scene, resource_directory)
        elif token == "transform":
            _load_transformation(args, scene)
        elif token == "render":
            scene.root.build_octree()
            _render(args, scene, output_directory)
        elif token == "add":
            _add_to_composite(args, scene)
    scene.root.build_octree()
    return scene