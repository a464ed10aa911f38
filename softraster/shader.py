"""Shader interface and the per-vertex data passed to the rasterizer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from .matrix import Matrix
from .tga import TGAColor
from .vector import Vec

_ZERO2 = Vec(0, 0)
_ZERO3 = Vec(0, 0, 0)
_ZERO_4X4 = Matrix.diagonal(4, 4, 0.0)
_ZERO_3X3 = Matrix.diagonal(3, 3, 0.0)


@dataclass
class Varyings:
    """Values produced per vertex and interpolated across a triangle."""

    screen_pos: Vec = _ZERO3
    uv: Vec = _ZERO2
    normal: Vec = _ZERO3
    world_pos: Vec = _ZERO3
    tangent: Vec = _ZERO3
    bitangent: Vec = _ZERO3
    inv_w: float = 1.0


@dataclass
class Uniforms:
    """Values shared by every vertex and fragment of one draw."""

    model: Matrix = _ZERO_4X4
    model_view: Matrix = _ZERO_4X4
    projection: Matrix = _ZERO_4X4
    viewport: Matrix = _ZERO_4X4
    normal_matrix: Matrix = _ZERO_3X3
    light_dir: Vec = _ZERO3
    camera_pos: Vec = _ZERO3
    light_space_matrix: Matrix = _ZERO_4X4
    light_proj_view: Matrix = _ZERO_4X4
    shadow_map: list[float] | None = field(default=None, repr=False)
    shadow_width: int = 0
    shadow_height: int = 0


class Shader(ABC):
    """A vertex and fragment program pair."""

    def __init__(self, uniforms: Uniforms | None = None) -> None:
        self.uniforms = uniforms if uniforms is not None else Uniforms()
        self.out_normal = _ZERO3

    @abstractmethod
    def vertex(self, local_pos: Vec, normal: Vec, uv: Vec, tangent: Vec, bitangent: Vec) -> Varyings:
        """Transform one vertex."""

    @abstractmethod
    def fragment(self, varyings: Varyings) -> TGAColor | None:
        """Shade one pixel; None discards it."""


def _blend(a: Vec, b: Vec, c: Vec, bc: Vec) -> Vec:
    return a * bc.x + b * bc.y + c * bc.z


def interpolate(v1: Varyings, v2: Varyings, v3: Varyings, bc: Vec) -> Varyings:
    """Weight three vertices' varyings by barycentric coordinates."""
    return Varyings(
        screen_pos=_blend(v1.screen_pos, v2.screen_pos, v3.screen_pos, bc),
        uv=_blend(v1.uv, v2.uv, v3.uv, bc),
        normal=_blend(v1.normal, v2.normal, v3.normal, bc),
        world_pos=_blend(v1.world_pos, v2.world_pos, v3.world_pos, bc),
        tangent=_blend(v1.tangent, v2.tangent, v3.tangent, bc),
        bitangent=_blend(v1.bitangent, v2.bitangent, v3.bitangent, bc),
        inv_w=v1.inv_w * bc.x + v2.inv_w * bc.y + v3.inv_w * bc.z,
    )