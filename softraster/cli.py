"""Command line entry point that renders the demo scene to a TGA file."""

from __future__ import annotations

import argparse
import dataclasses
import os
import sys

from .camera import Camera
from .model_instance import ModelInstance
from .renderer import RenderBuffers, Renderer
from .scene import Scene
from .tga import TGAError
from .vector import Vec


def build_scene(models_root: str | os.PathLike) -> Scene:
    """Three demons, a head with its eyes, and a floor."""
    camera = Camera(Vec(0, 2, 6), Vec(0, 0, 0), Vec(0, 1, 0), 3.0)
    light_pos = Vec(2, 3, 3).normalize() * 5.0
    light_dir = (light_pos - camera.look_at).normalize()
    scene = Scene(camera, light_dir, light_pos)

    obj_root = os.path.join(models_root, "obj")
    diablo_root = os.path.join(obj_root, "diablo3_pose")
    head_root = os.path.join(obj_root, "african_head")

    diablo = ModelInstance.from_files(
        diablo_root,
        "diablo3_pose.obj",
        "diablo3_pose_diffuse.tga",
        "diablo3_pose_nm_tangent.tga",
        "diablo3_pose_spec.tga",
        False,
    )
    placements = [
        (Vec(0, 40, 0), Vec(0.55, 0.55, 0.55), Vec(-1.15, -0.42, -2.5)),
        (Vec(0, -50, 0), Vec(0.45, 0.45, 0.45), Vec(1.3, -0.53, -2.8)),
        (Vec(0, 100, 0), Vec(0.35, 0.35, 0.35), Vec(-1.15, -0.60, -0.1)),
    ]
    for rotation, scale, position in placements:
        scene.add_model(
            dataclasses.replace(diablo, rotation=rotation, scale=scale, position=position)
        )

    head_pose = dict(
        rotation=Vec(-20, 10, 0),
        scale=Vec(0.6, 0.6, 0.6),
        position=Vec(0, -0.8, -1.2),
    )
    for stem in ("african_head", "african_head_eye_inner"):
        part = ModelInstance.from_files(
            head_root,
            f"{stem}.obj",
            f"{stem}_diffuse.tga",
            f"{stem}_nm_tangent.tga",
            f"{stem}_spec.tga",
            False,
        )
        scene.add_model(dataclasses.replace(part, **head_pose))

    floor = ModelInstance.from_files(
        obj_root,
        "floor.obj",
        "floor_diffuse.tga",
        "floor_nm_tangent.tga",
        "floor_spec.tga",
        False,
    )
    scene.add_model(
        dataclasses.replace(floor, scale=Vec(2.0, 1.0, 2.0), position=Vec(0.0, 0.0, -2.0))
    )
    return scene


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render the demo scene to a TGA image.")
    parser.add_argument("--models-root", default=os.path.join("..", "Models"),
                        help="directory holding the obj/ model tree")
    parser.add_argument("--output", default="final_scene.tga", help="output TGA file")
    parser.add_argument("--width", type=int, default=2000)
    parser.add_argument("--height", type=int, default=2000)
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the ambient-occlusion sampling")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    if args.width <= 0 or args.height <= 0:
        print("error: width and height must be positive", file=sys.stderr)
        return 2
    try:
        scene = build_scene(args.models_root)
    except (OSError, ValueError, IndexError, TGAError) as exc:
        print(f"error: cannot load the scene: {exc}", file=sys.stderr)
        return 1

    buffers = RenderBuffers(args.width, args.height)
    Renderer(args.seed).render(scene, buffers)

    try:
        buffers.framebuffer.write(args.output)
    except (OSError, TGAError) as exc:
        print(f"error: cannot write {args.output}: {exc}", file=sys.stderr)
        return 1
    print(f"Done! Saved {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())