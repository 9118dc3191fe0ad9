"""Keyframe animations that produce scene description lines over time."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

from .bodypart import Body, Pose
from .vector import Vec3

PI = 3.14159265

EaseFunction = Callable[[float, float], float]


def ease_linear(percent: float, exp: float) -> float:
    return percent


def ease_cos_in(percent: float, exp: float) -> float:
    return math.pow(1.0 - math.cos(percent * PI * 0.5), exp)


def ease_sin_in(percent: float, exp: float) -> float:
    return math.pow(math.sin(percent * PI * 0.5), exp)


def _fmt(value: float) -> str:
    return format(value, "g")


def _triple(v: Vec3) -> str:
    return f"{_fmt(v.x)} {_fmt(v.y)} {_fmt(v.z)}"


@dataclass
class Interval:
    """A half-open span of time [start_time, start_time + duration)."""

    start_time: float = 0.0
    duration: float = 1.0

    def is_active(self, current_time: float) -> bool:
        return self.start_time <= current_time < self.start_time + self.duration

    def progress(self, current_time: float) -> float:
        return (current_time - self.start_time) / self.duration


@dataclass
class Animation:
    """Moves a shape's transform parameters from start to end; end defaults to start."""

    name: str = "undefined"
    kind: str = "translate"
    time: Interval = field(default_factory=Interval)
    start: Vec3 = Vec3()
    end: Optional[Vec3] = None
    ease: EaseFunction = ease_linear
    ease_exp: float = 1.0

    def __post_init__(self) -> None:
        if self.end is None:
            self.end = self.start


@dataclass
class CamAnimation:
    """Moves the camera; the end position and direction default to the start ones."""

    time: Interval = field(default_factory=Interval)
    pos_start: Vec3 = Vec3()
    dir_start: Vec3 = Vec3()
    pos_end: Optional[Vec3] = None
    dir_end: Optional[Vec3] = None
    ease: EaseFunction = ease_linear
    ease_exp: float = 1.0
    fov: float = 60.0

    def __post_init__(self) -> None:
        if self.pos_end is None:
            self.pos_end = self.pos_start
        if self.dir_end is None:
            self.dir_end = self.dir_start


@dataclass
class BodyAnimation:
    """Blends linearly from one pose to another."""

    pose0: Pose = field(default_factory=Pose)
    pose1: Pose = field(default_factory=Pose)
    time: Interval = field(default_factory=Interval)


def get_current_transform(animation: Animation, current_time: float) -> str:
    """The transform line for the animation's state at current_time."""
    progress = animation.ease(animation.time.progress(current_time), animation.ease_exp)
    assert animation.end is not None
    state = animation.start + (animation.end - animation.start) * progress
    return f"transform {animation.name} {animation.kind} {_triple(state)}"


def get_current_cam(animation: CamAnimation, current_time: float) -> str:
    """The camera definition line for the animation's state at current_time."""
    progress = animation.ease(animation.time.progress(current_time), animation.ease_exp)
    assert animation.pos_end is not None and animation.dir_end is not None
    position = animation.pos_start + (animation.pos_end - animation.pos_start) * progress
    direction = animation.dir_start + (animation.dir_end - animation.dir_start) * progress
    return (
        f"define camera eye {_fmt(animation.fov)} "
        f"{_triple(position)} {_triple(direction)} 0 1 0"
    )


def read_pose(file_path: Union[str, os.PathLike]) -> Pose:
    """Read lines of "name pitch yaw roll"; the first entry for a name wins."""
    pose = Pose()
    with open(file_path) as handle:
        for number, line in enumerate(handle, 1):
            words = line.split()
            if not words:
                continue
            if len(words) < 4:
                raise ValueError(f"{file_path}:{number}: expected a name and three angles")
            name = words[0]
            try:
                pitch, yaw, roll = (float(word) for word in words[1:4])
            except ValueError:
                raise ValueError(f"{file_path}:{number}: angles must be numbers") from None
            pose.rotations.setdefault(name, Vec3(pitch, yaw, roll))
    return pose


def apply_current_pose(body: Body, animation: BodyAnimation, current_time: float) -> None:
    """Pose the body with the blend of the animation's poses at current_time."""
    progress = animation.time.progress(current_time)
    current = Pose()
    for name, rot0 in animation.pose0.rotations.items():
        try:
            rot1 = animation.pose1.rotations[name]
        except KeyError:
            raise KeyError(f"target pose has no rotation for {name!r}") from None
        current.rotations[name] = rot0 * (1 - progress) + rot1 * progress
    body.apply_pose(current)