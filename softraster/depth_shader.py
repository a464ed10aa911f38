"""A shader that only produces depth, for shadow maps."""

from __future__ import annotations

import math

from .shader import Shader, Uniforms, Varyings
from .tga import TGAColor
from .vector import Vec


def _reciprocal(value: float) -> float:
    return 1.0 / value if value != 0 else math.copysign(math.inf, value)


class DepthShader(Shader):
    """Projects vertices to the screen and never discards a fragment."""

    def __init__(self, uniforms: Uniforms) -> None:
        super().__init__(uniforms)

    def vertex(self, local_pos: Vec, normal: Vec, uv: Vec, tangent: Vec, bitangent: Vec) -> Varyings:
        u = self.uniforms
        clip = u.projection @ u.model_view @ local_pos.homogeneous()
        inv_w = _reciprocal(clip.w)
        screen = u.viewport @ (clip * inv_w)
        return Varyings(screen_pos=screen.xyz(), inv_w=inv_w)

    def fragment(self, varyings: Varyings) -> TGAColor:
        return TGAColor()