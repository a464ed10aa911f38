"""A scene: placed models, a camera and a light."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from .camera import Camera
from .model_instance import ModelInstance
from .vector import Vec


@dataclass
class Scene:
    """Models to draw, seen from a camera and lit from one light."""

    camera: Camera
    light_dir: Vec
    light_pos: Vec
    light_color: Vec = Vec(1, 1, 1)
    models: list[ModelInstance] = field(default_factory=list)

    def add_model(self, model: ModelInstance) -> None:
        """Add a copy of the instance, so later changes to it are not seen."""
        self.models.append(dataclasses.replace(model))