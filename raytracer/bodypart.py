"""An articulated body whose parts are written out as scene description lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .vector import Vec3


def _fmt(value: float) -> str:
    return format(value, "g")


def _triple(v: Vec3) -> str:
    return f"{_fmt(v.x)} {_fmt(v.y)} {_fmt(v.z)}"


@dataclass
class BodyPart:
    """A named part loaded from an .obj file, placed relative to its parent."""

    name: str = "undefined"
    offset: Vec3 = Vec3()
    rotation: Vec3 = Vec3()
    children: List[BodyPart] = field(default_factory=list)

    def __str__(self) -> str:
        text = "".join(str(child) for child in self.children)
        text += f"define shape obj {self.name}\n"
        if self.children:
            names = [self.name, *(child.name for child in self.children)]
            text += "add " + " ".join(names) + "\n"
        text += f"transform {self.name} translate {_triple(self.offset)}\n"
        text += f"transform {self.name} rotate {_triple(self.rotation)}\n"
        text += "\n"
        return text


@dataclass
class Pose:
    """Rotations by part name; the key "offset" moves the whole body."""

    rotations: Dict[str, Vec3] = field(default_factory=dict)


_LAYOUT = (
    ("chest", None, Vec3()),
    ("head", "chest", Vec3(-2.6547, 63.9209, 2.93762)),
    ("arm-left", "chest", Vec3(-25.1092, 48.3269, 3.80979)),
    ("arm-right", "chest", Vec3(16.7486, 50.3349, 5.91147)),
    ("hand-left", "arm-left", Vec3(-2.2336, 1.75708, 23.991)),
    ("hand-right", "arm-right", Vec3(3.19166, 2.45541, 23.599)),
    ("leg-left", "chest", Vec3(-6.3, 0.0, 0.0)),
    ("leg-right", "chest", Vec3(6.3, 0.0, 0.0)),
    ("foot-left", "leg-left", Vec3(-0.91754, 0.8892, 43.1269)),
    ("foot-right", "leg-right", Vec3(3.4825, 0.8892, 43.1269)),
)


class Body:
    """A humanoid made of ten parts rooted at the chest."""

    def __init__(self) -> None:
        self._parts: Dict[str, BodyPart] = {}
        for name, parent, offset in _LAYOUT:
            part = BodyPart(name, offset)
            self._parts[name] = part
            if parent is not None:
                self._parts[parent].children.append(part)

    def find_part(self, name: str) -> Optional[BodyPart]:
        return self._parts.get(name)

    def apply_pose(self, pose: Pose) -> None:
        """Set each named part's rotation; "offset" sets the chest's offset."""
        for name, value in sorted(pose.rotations.items()):
            if name == "offset":
                self._parts["chest"].offset = value
                continue
            part = self.find_part(name)
            if part is None:
                raise KeyError(f"unknown body part {name!r}")
            part.rotation = value

    def __str__(self) -> str:
        return (
            str(self._parts["chest"])
            + "define shape composite body chest\n"
            + "transform body translate 0 97.4361 0\n"
        )