"""Generating per-frame scene files for an animated movie and rendering them."""

from __future__ import annotations

import argparse
import math
import os
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, Union

from .animation import (
    Animation,
    BodyAnimation,
    CamAnimation,
    Interval,
    apply_current_pose,
    ease_cos_in,
    ease_sin_in,
    get_current_cam,
    get_current_transform,
    read_pose,
)
from .bodypart import Body
from .scene import load_scene
from .vector import Vec3

PathLike = Union[str, os.PathLike]


def _frame_name(frame: int) -> str:
    return f"frame{frame:04d}"


def write_to_sdf(
    object_map: Mapping[str, Interval],
    animations: Sequence[Animation],
    cam_animations: Sequence[CamAnimation],
    body_animations: Sequence[BodyAnimation],
    fps: int,
    movie_duration: float,
    out_directory: PathLike,
    res_x: int,
    res_y: int,
    aa_steps: int,
    ray_bounces: int,
) -> None:
    """Write one scene file per frame into out_directory."""
    out = Path(out_directory)
    out.mkdir(parents=True, exist_ok=True)
    frame_duration = 1.0 / fps
    total_frame_count = int(movie_duration * fps)
    body = Body()

    for frame in range(total_frame_count):
        current_time = frame * frame_duration
        name = _frame_name(frame)
        parts: List[str] = []

        body_animation = next(
            (a for a in body_animations if a.time.is_active(current_time)), None
        )
        if body_animation is not None:
            apply_current_pose(body, body_animation, current_time)
            parts.append(str(body))
        parts.append("\n")

        parts.extend(
            f"{line}\n" for line in sorted(object_map) if object_map[line].is_active(current_time)
        )
        parts.append("\n")

        parts.extend(
            get_current_transform(a, current_time) + "\n"
            for a in animations
            if a.time.is_active(current_time)
        )
        parts.append("\n")

        cam = next((a for a in cam_animations if a.time.is_active(current_time)), None)
        if cam is not None:
            parts.append(get_current_cam(cam, current_time) + "\n")
        parts.append(f"render {name}.ppm {res_x} {res_y} {aa_steps} {ray_bounces}\n")

        (out / f"{name}.sdf").write_text("".join(parts))


def generate_movie(res_dir: PathLike, out_dir: PathLike) -> None:
    """Write the scene files of the whole movie, reading poses from res_dir."""
    movie_duration = 41.0
    fps = 24
    res = Path(res_dir)

    velocity = 80.0
    walk_speed = 18.125 / velocity
    halt_speed = 0.25
    steal_speed = 1.0
    walk_pose_count = math.ceil(29.0 / walk_speed)

    walk = [read_pose(res / "walk" / f"pose{i:02d}.txt") for i in range(1, 9)]
    halt = [read_pose(res / "halt" / f"pose{i:02d}.txt") for i in range(1, 6)]
    steal = [read_pose(res / "steal" / f"pose{i:02d}.txt") for i in range(1, 11)]

    body_animations: List[BodyAnimation] = [
        BodyAnimation(
            walk[i % len(walk)], walk[(i + 1) % len(walk)], Interval(i * walk_speed, walk_speed)
        )
        for i in range(walk_pose_count)
    ]
    body_animations += [
        BodyAnimation(halt[i], halt[i + 1], Interval(29 + i * halt_speed, halt_speed))
        for i in range(4)
    ]
    body_animations.append(BodyAnimation(halt[4], halt[4], Interval(30, 2)))
    body_animations += [
        BodyAnimation(steal[i], steal[i + 1], Interval(32 + i * steal_speed, steal_speed))
        for i in range(9)
    ]

    animations: List[Animation] = [
        Animation("body", "translate", Interval(0, 29), Vec3(0, 0, 0), Vec3(29 * velocity, 0, 0)),
        Animation(
            "body", "translate", Interval(29, 1),
            Vec3(29 * velocity, 0, 0), Vec3(29.25 * velocity, 0, 0),
        ),
        Animation("body", "translate", Interval(30, 2), Vec3(29.25 * velocity, 0, 0)),
        Animation("body", "translate", Interval(32, 10), Vec3(2520 - 50, 0, 0)),
        Animation("body", "rotate", Interval(0, movie_duration), Vec3(0, -90, 0)),
    ]

    always = Interval(0, movie_duration)
    wb_time = Interval(1, 11)
    ws_time = Interval(3, 18.5)
    rb_time = Interval(6, 16)
    ts_time = Interval(13, 16)
    td_time = Interval(24, 20)

    object_map = {
        "define ambient amb 1 1 1 1": always,
        "define light bulb -20000 100000 30000 1 1 1 6": always,
        "define material white 1 1 1 1 1 1 0 0 0 1 0 1 1": always,
        "define material white_glaze 1 1 1 1 1 1 1 1 1 200 .1 1 1": always,
        "define material silver 1 1 .9 1 1 .9 1 1 .9 200 .5 1 1": always,
        "define material gold 1 .76 0 1 .76 0 1 .76 0 200 .5 1 1": always,
        "define material bronze .64 .28 .15 .64 .28 .15 .96 .14 .08 200 .5 1 1": always,
        "define material lapis .05 0 1 .05 0 1 1 1 1 200 .05 1 1": always,
        "define material yellow_glass 0 0 0 1 .9 .7 1 1 1 500 .01 0.1 1.01": always,
        "define material red_glass 0 0 0 1 .7 .7 1 1 1 500 .01 0.1 1.05": always,
        "define material blue_glass 0 0 0 .6 .6 1 1 1 1 500 .01 0.1 1.1": always,
        "define shape box floor 0 0 0 10000 1 2000 white": always,
        "define shape box wb1 -20 0 -20 20 40 20 white": wb_time,
        "define shape box wb2 -30 -30 -30 30 100 30 white": wb_time,
        "define shape box wb3 -15 -15 -15 15 70 15 white": wb_time,
        "define shape sphere ws1 0 10 0 10 white_glaze": ws_time,
        "define shape sphere ws2 0 35 0 35 white_glaze": ws_time,
        "define shape sphere ws3 0 20 0 20 white_glaze": ws_time,
        "define shape box rb1 -40 0 -40 40 140 40 silver": rb_time,
        "define shape box rb2 -40 0 -40 40 180 40 gold": rb_time,
        "define shape box rb3 -40 0 -40 40 150 40 bronze": rb_time,
        "define shape box rb4 -40 0 -40 40 160 40 lapis": rb_time,
        "define shape sphere ts1 0 70 0 70 yellow_glass": ts_time,
        "define shape sphere ts2 0 75 0 75 red_glass": ts_time,
        "define shape sphere ts3 0 80 0 80 blue_glass": ts_time,
        "define shape box socle -15 0 -15 15 70 15 white": td_time,
        "define shape obj dodecahedron": td_time,
    }

    chest_height = 100.0
    cam_dist = 550.0
    forward = Vec3(0, 0, -1)
    cam_animations = [
        CamAnimation(
            Interval(0, 3), Vec3(50, 20, 150), Vec3(0, -0.1, -1),
            Vec3(3 * velocity, chest_height, cam_dist), forward, ease_cos_in, 0.7,
        ),
        CamAnimation(
            Interval(3, 29 - 3), Vec3(3 * velocity, chest_height, cam_dist), forward,
            Vec3(29 * velocity, chest_height, cam_dist),
        ),
        CamAnimation(
            Interval(29, 2), Vec3(29 * velocity, chest_height, cam_dist), forward,
            Vec3(30.5 * velocity, chest_height, cam_dist), forward, ease_sin_in, 1,
        ),
        CamAnimation(Interval(31, 1), Vec3(30.5 * velocity, chest_height, cam_dist), forward),
        CamAnimation(
            Interval(32, 4), Vec3(2520 + 155, 105, 0), Vec3(-1, 0, 0),
            Vec3(2520 + 155, 95, 0), Vec3(-1, 0.2, 0),
        ),
        CamAnimation(
            Interval(36, 5), Vec3(2520 + 155, 95, 0), Vec3(-1, 0.2, 0),
            Vec3(2520 + 155, 80, 0), Vec3(-1, 0.5, 0),
        ),
    ]

    animations += [
        Animation("floor", "translate", always, Vec3(-1000, -1, -800)),
        Animation("wb1", "translate", wb_time, Vec3(370, 0, -110)),
        Animation("wb2", "translate", wb_time, Vec3(450, 0, -100)),
        Animation("wb3", "translate", wb_time, Vec3(510, 0, -110)),
        Animation("ws1", "translate", ws_time, Vec3(600, 0, 60)),
        Animation("ws2", "translate", ws_time, Vec3(650, 0, 40)),
        Animation("ws3", "translate", ws_time, Vec3(700, 0, 70)),
        Animation("rb1", "translate", rb_time, Vec3(950, 0, -130)),
        Animation("rb2", "translate", rb_time, Vec3(1080, 0, -120)),
        Animation("rb3", "translate", rb_time, Vec3(1210, 0, -110)),
        Animation("rb4", "translate", rb_time, Vec3(1340, 0, -100)),
        Animation("ts1", "translate", ts_time, Vec3(1600, 0, 200)),
        Animation("ts2", "translate", ts_time, Vec3(1805, 0, 200)),
        Animation("ts3", "translate", ts_time, Vec3(2000, 0, 200)),
        Animation("socle", "translate", td_time, Vec3(2520, 0, 0)),
        Animation("dodecahedron", "translate", td_time, Vec3(2520, 110, 0)),
        Animation(
            "dodecahedron", "translate", Interval(36, 5), Vec3(0, 0, 0), Vec3(0, 70, 0),
            ease_cos_in, 1,
        ),
        Animation("wb1", "rotate", wb_time, Vec3(0, -35, 0)),
        Animation("wb2", "rotate", wb_time, Vec3(0, 15, 15)),
        Animation("wb3", "rotate", wb_time, Vec3(0, -10, -10)),
        Animation("rb1", "rotate", rb_time, Vec3(0, 30, 0)),
        Animation("rb2", "rotate", rb_time, Vec3(0, -20, 0)),
        Animation("rb3", "rotate", rb_time, Vec3(0, -35, 0)),
        Animation("rb4", "rotate", rb_time, Vec3(0, -25, 0)),
        Animation("dodecahedron", "rotate", td_time, Vec3(25, 0, 0), Vec3(25, -360, 0)),
        Animation("dodecahedron", "scale", td_time, Vec3(2.5, 2.5, 2.5)),
    ]

    write_to_sdf(
        object_map,
        animations,
        cam_animations,
        body_animations,
        fps,
        movie_duration,
        out_dir,
        1920,
        1080,
        2,
        4,
    )


def render_movie(
    start_frame: int,
    end_frame: int,
    src_dir: PathLike,
    res_dir: PathLike,
    out_dir: PathLike,
) -> None:
    """Load (and so render) the scene files of frames start_frame to end_frame."""
    for frame in range(start_frame, end_frame + 1):
        file_name = f"{_frame_name(frame)}.sdf"
        path = Path(src_dir) / file_name
        if path.exists():
            load_scene(path, res_dir, out_dir)
        print(file_name)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="moviemaker", description="Generate and render the frames of the movie."
    )
    parser.add_argument("--res-dir", default="./movie/obj", help="directory of models and poses")
    parser.add_argument("--files-dir", default="./movie/files", help="directory for scene files")
    parser.add_argument("--images-dir", default="./movie/images", help="directory for images")
    parser.add_argument("--start", type=int, default=0, help="first frame to render")
    parser.add_argument("--end", type=int, default=984, help="last frame to render")
    args = parser.parse_args(argv)

    print("generate sdfs")
    generate_movie(args.res_dir, args.files_dir)

    print("render sdfs")
    Path(args.images_dir).mkdir(parents=True, exist_ok=True)
    render_movie(args.start, args.end, args.files_dir, args.res_dir, args.images_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())