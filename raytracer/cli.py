"""Command line entry point: render the scene named by a resource-paths file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from .renderer import Renderer
from .scene import load_scene


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="raytracer", description="Render a scene description to a PPM image."
    )
    parser.add_argument(
        "--paths-file",
        default="resource-paths.txt",
        help="file whose first line is the resource directory",
    )
    parser.add_argument("--scene", default="cornell.sdf", help="scene file in the resource directory")
    parser.add_argument("--output", default="img.ppm", help="image file in the resource directory")
    parser.add_argument("--size", type=int, default=800, help="width and height of the image")
    parser.add_argument("--aa-steps", type=int, default=2, help="anti-aliasing samples per axis")
    parser.add_argument("--bounces", type=int, default=5, help="maximum ray bounces")
    args = parser.parse_args(argv)

    try:
        with open(args.paths_file) as handle:
            resource_directory = handle.readline().rstrip("\r\n")
    except OSError as exc:
        print(f"cannot read {args.paths_file}: {exc}", file=sys.stderr)
        return 1
    print(f"resource directory: {resource_directory}")
    base = Path(resource_directory)

    try:
        scene = load_scene(base / args.scene, base, base)
    except (OSError, KeyError, ValueError, TypeError, IndexError) as exc:
        print(f"cannot load scene: {exc}", file=sys.stderr)
        return 1

    renderer = Renderer(args.size, args.size, base / args.output, args.aa_steps, args.bounces)
    print(f"shapes {scene.root.child_count()}")
    print(f"lights {len(scene.lights)}")

    try:
        renderer.render(scene, scene.camera)
    except ValueError as exc:
        print(f"Exception: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())