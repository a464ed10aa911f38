"""The viewing camera."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vec


@dataclass(frozen=True)
class Camera:
    """A camera at pos looking at look_at, with an up direction and focal length."""

    pos: Vec
    look_at: Vec
    up: Vec
    focal_length: float