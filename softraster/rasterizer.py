"""Triangle rasterization with depth testing."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .geometry import BBox
from .shader import Shader, Varyings, interpolate
from .tga import TGAImage
from .vector import EPSILON, Vec, determinant_2d


@dataclass
class RenderContext:
    """The mesh being drawn and the buffers it is drawn into."""

    model: object
    framebuffer: TGAImage
    zbuffer: list[float]
    normal_buffer: list[Vec] | None = None


def barycentric(a: Vec, b: Vec, c: Vec, p: Vec) -> Vec:
    """Barycentric coordinates of p in triangle abc; (-1, 1, 1) if degenerate."""
    v0 = b - a
    v1 = c - a
    v2 = p - a
    denom = determinant_2d(v0, v1)
    if abs(denom) < EPSILON:
        return Vec(-1, 1, 1)
    beta = determinant_2d(v2, v1) / denom
    gamma = determinant_2d(v0, v2) / denom
    return Vec(1.0 - beta - gamma, beta, gamma)


def triangle_bbox(pts: Sequence[Vec]) -> BBox:
    """The 2D bounding box of the points, with z set to zero."""
    xs = [p.x for p in pts]
    ys = [p.y for p in pts]
    return BBox(Vec(min(xs), min(ys), 0), Vec(max(xs), max(ys), 0))


def draw_triangle(varyings: Sequence[Varyings], shader: Shader, ctx: RenderContext) -> None:
    """Fill one screen-space triangle, running the fragment shader per pixel."""
    pts = [v.screen_pos for v in varyings]
    if not all(math.isfinite(p.x) and math.isfinite(p.y) for p in pts):
        return
    box = triangle_bbox(pts)
    width = ctx.framebuffer.width
    height = ctx.framebuffer.height

    min_x = max(0, int(box.box_min.x))
    max_x = min(width - 1, int(box.box_max.x))
    min_y = max(0, int(box.box_min.y))
    max_y = min(height - 1, int(box.box_max.y))

    corners = [Vec(p.x, p.y) for p in pts]
    for x in range(min_x, max_x + 1):
        for y in range(min_y, max_y + 1):
            bc = barycentric(*corners, Vec(x, y))
            if bc.x < 0 or bc.y < 0 or bc.z < 0:
                continue
            z = pts[0].z * bc.x + pts[1].z * bc.y + pts[2].z * bc.z
            index = x + y * width
            if not ctx.zbuffer[index] < z:
                continue
            color = shader.fragment(interpolate(*varyings, bc))
            if color is None:
                continue
            ctx.zbuffer[index] = z
            ctx.framebuffer.set(x, y, color)
            if ctx.normal_buffer is not None:
                ctx.normal_buffer[index] = shader.out_normal


def draw_model(ctx: RenderContext, shader: Shader) -> None:
    """Draw every face of the context's model."""
    for face in ctx.model.faces:
        tangent, bitangent = triangle_basis(face.pts, face.uv)
        triangle = [
            shader.vertex(pt, normal, uv, tangent, bitangent)
            for pt, normal, uv in zip(face.pts, face.normals, face.uv)
        ]
        draw_triangle(triangle, shader, ctx)


def triangle_basis(pts: Sequence[Vec], uvs: Sequence[Vec]) -> tuple[Vec, Vec]:
    """The normalized tangent and bitangent of a textured triangle."""
    edge1 = pts[1] - pts[0]
    edge2 = pts[2] - pts[0]
    d1 = uvs[1] - uvs[0]
    d2 = uvs[2] - uvs[0]

    denom = d1.x * d2.y - d2.x * d1.y
    f = 1.0 / denom if denom != 0 else math.copysign(math.inf, denom)

    tangent = (edge1 * d2.y - edge2 * d1.y) * f
    bitangent = (edge2 * d1.x - edge1 * d2.x) * f
    return tangent.normalize(), bitangent.normalize()