"""Textured Phong lighting with normal mapping and shadow-map lookups."""

from __future__ import annotations

import math

from .shader import Shader, Uniforms, Varyings
from .tga import TGAColor, TGAImage
from .vector import Vec, dot

_AMBIENT = 0.3
_ALPHA_TEST_LIMIT = 200
_SHADOW_BIAS = 0.005
_SHININESS = 10.0


def _reciprocal(value: float) -> float:
    return 1.0 / value if value != 0 else math.copysign(math.inf, value)


def _texel(image: TGAImage, uv: Vec) -> TGAColor:
    """The texture pixel under the uv coordinate, blank when off the image."""
    x = uv.x * image.width
    y = uv.y * image.height
    if not (math.isfinite(x) and math.isfinite(y)):
        return TGAColor()
    return image.get(int(x), int(y))


class PhongShader(Shader):
    """Diffuse, normal and specular maps lit by one directional light."""

    def __init__(
        self,
        diffuse_map: TGAImage,
        normal_map: TGAImage,
        specular_map: TGAImage,
        uniforms: Uniforms,
        use_alpha_test: bool = False,
    ) -> None:
        super().__init__(uniforms)
        self.diffuse_map = diffuse_map
        self.normal_map = normal_map
        self.specular_map = specular_map
        self.use_alpha_test = use_alpha_test

    def vertex(self, local_pos: Vec, normal: Vec, uv: Vec, tangent: Vec, bitangent: Vec) -> Varyings:
        u = self.uniforms
        local = local_pos.homogeneous()
        clip = u.projection @ u.model_view @ local
        inv_w = _reciprocal(clip.w)
        screen = u.viewport @ (clip * inv_w)
        world = (u.model @ local).xyz()
        # Attributes are divided by w here and restored per pixel,
        # giving perspective-correct interpolation.
        return Varyings(
            screen_pos=screen.xyz(),
            uv=uv * inv_w,
            world_pos=world * inv_w,
            normal=(u.normal_matrix @ normal).normalize() * inv_w,
            tangent=(u.normal_matrix @ tangent).normalize() * inv_w,
            bitangent=(u.normal_matrix @ bitangent).normalize() * inv_w,
            inv_w=inv_w,
        )

    def fragment(self, varyings: Varyings) -> TGAColor | None:
        w = _reciprocal(varyings.inv_w)
        uv = varyings.uv * w
        world_pos = varyings.world_pos * w
        n = varyings.normal.normalize()
        t = varyings.tangent.normalize()
        b = varyings.bitangent.normalize()

        shadow = self.shadow_factor(world_pos)
        final_normal = self.mapped_normal(uv, t, b, n)
        self.out_normal = final_normal

        diffuse, specular = self.lighting(final_normal, world_pos, uv, shadow)
        tex = _texel(self.diffuse_map, uv)
        total = _AMBIENT + diffuse + specular

        color = TGAColor()
        for i in range(3):
            color[i] = int(min(255.0, tex[i] * total))
        if self.use_alpha_test and tex[3] < _ALPHA_TEST_LIMIT:
            return None
        return color

    def shadow_factor(self, world_pos: Vec) -> float:
        """Fraction of a 3x3 shadow-map neighbourhood that sees the light."""
        u = self.uniforms
        if u.shadow_map is None:
            return 1.0
        light_clip = u.light_proj_view @ world_pos.homogeneous()
        ndc = light_clip.xyz() / light_clip.w
        sc_x = (ndc.x + 1.0) * 0.5 * u.shadow_width
        sc_y = (ndc.y + 1.0) * 0.5 * u.shadow_height
        current_depth = (ndc.z + 1.0) * 0.5
        if not (math.isfinite(sc_x) and math.isfinite(sc_y)):
            return 1.0

        base_x, base_y = int(sc_x), int(sc_y)
        lit = [
            0.0 if current_depth < u.shadow_map[sx + sy * u.shadow_width] - _SHADOW_BIAS else 1.0
            for sy in range(base_y - 1, base_y + 2)
            for sx in range(base_x - 1, base_x + 2)
            if 0 <= sx < u.shadow_width and 0 <= sy < u.shadow_height
        ]
        return sum(lit) / len(lit) if lit else 1.0

    def mapped_normal(self, uv: Vec, t: Vec, b: Vec, n: Vec) -> Vec:
        """The tangent-space normal map sample expressed in world space."""
        c = _texel(self.normal_map, uv)
        mx, my, mz = ((c[i] / 255.0) * 2.0 - 1.0 for i in (2, 1, 0))
        return (t * mx + b * my + n * mz).normalize()

    def lighting(self, normal: Vec, world_pos: Vec, uv: Vec, shadow_factor: float) -> tuple[float, float]:
        """Diffuse and specular intensities at a surface point."""
        u = self.uniforms
        light = u.light_dir.normalize()
        view = (u.camera_pos - world_pos).normalize()
        dot_nl = dot(normal, light)
        diffuse = max(0.0, dot_nl) * shadow_factor

        reflected = (normal * (2.0 * dot_nl) - light).normalize()
        spec_sample = _texel(self.specular_map, uv)
        specular = (
            max(0.0, dot(reflected, view)) ** _SHININESS
            * (spec_sample[0] / 255.0)
            * shadow_factor
        )
        return diffuse, specular