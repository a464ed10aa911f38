"""A mesh with its textures, placed in the world."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .matrix import Matrix
from .model_loader import Model
from .tga import TGAImage
from .vector import Vec


@dataclass
class ModelInstance:
    """A model, its diffuse, normal and specular maps, and its transform.

    Rotation holds Euler angles in degrees.
    """

    model: Model
    diffuse: TGAImage
    normal: TGAImage
    specular: TGAImage
    use_alpha_test: bool = False
    position: Vec = Vec(0, 0, 0)
    rotation: Vec = Vec(0, 0, 0)
    scale: Vec = Vec(1, 1, 1)

    @classmethod
    def from_files(
        cls,
        root: str | os.PathLike,
        obj_path: str,
        diffuse_path: str,
        normal_path: str,
        specular_path: str,
        use_alpha_test: bool = False,
    ) -> ModelInstance:
        """Load the mesh and its three texture maps from a directory."""
        model = Model(os.path.join(root, obj_path))
        maps = [
            TGAImage.read(os.path.join(root, name))
            for name in (diffuse_path, normal_path, specular_path)
        ]
        for image in maps:
            image.flip_vertically()
        return cls(model, *maps, use_alpha_test=use_alpha_test)

    @property
    def model_matrix(self) -> Matrix:
        """Scale, then rotate about Z, Y and X, then translate."""
        t = Matrix.translation(self.position)
        s = Matrix.scale(self.scale.x, self.scale.y, self.scale.z)
        rx = Matrix.rotation_x(self.rotation.x)
        ry = Matrix.rotation_y(self.rotation.y)
        rz = Matrix.rotation_z(self.rotation.z)
        return t @ (rx @ ry @ rz) @ s