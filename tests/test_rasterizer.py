import math

import pytest

from softraster.geometry import BBox
from softraster.model_loader import Model
from softraster.rasterizer import (
    RenderContext,
    barycentric,
    draw_model,
    draw_triangle,
    triangle_basis,
    triangle_bbox,
)
from softraster.shader import Shader, Varyings
from softraster.tga import Format, TGAColor, TGAImage
from softraster.vector import EPSILON, Vec

TRIANGLE_OBJ = (
    "v 0 0 0\nv 1 0 0\nv 0 1 0\n"
    "vt 0 0\nvt 1 0\nvt 0 1\n"
    "vn 0 0 1\n"
    "f 1/1/1 2/2/1 3/3/1\n"
)


class FlatShader(Shader):
    def __init__(self, color=None, discard=False):
        super().__init__()
        self.color = color or TGAColor(10, 20, 30, 255)
        self.discard = discard

    def vertex(self, local_pos, normal, uv, tangent, bitangent):
        return Varyings(screen_pos=Vec(local_pos.x * 4, local_pos.y * 4, local_pos.z))

    def fragment(self, varyings):
        self.out_normal = Vec(0, 0, 1)
        return None if self.discard else self.color


def _context(normal_buffer=False, depth=-math.inf):
    return RenderContext(
        model=None,
        framebuffer=TGAImage(5, 5, Format.RGB),
        zbuffer=[depth] * 25,
        normal_buffer=[Vec(0, 0, 0)] * 25 if normal_buffer else None,
    )


def _triangle():
    return [
        Varyings(screen_pos=Vec(0, 0, 0)),
        Varyings(screen_pos=Vec(4, 0, 0)),
        Varyings(screen_pos=Vec(0, 4, 0)),
    ]


def test_barycentric_source_cases():
    a, b, c = Vec(0, 0), Vec(10, 0), Vec(0, 10)
    bc = barycentric(a, b, c, Vec(0, 0))
    assert abs(bc.x - 1.0) < EPSILON
    bc = barycentric(a, b, c, Vec(3.333, 3.333))
    assert abs(bc.x - 0.3333) < 1e-2


def test_barycentric_sums_to_one():
    bc = barycentric(Vec(0, 0), Vec(10, 0), Vec(0, 10), Vec(2, 7))
    assert sum(bc) == pytest.approx(1.0)


def test_barycentric_degenerate():
    assert barycentric(Vec(0, 0), Vec(1, 1), Vec(2, 2), Vec(0, 0)) == Vec(-1, 1, 1)


def test_triangle_bbox():
    box = triangle_bbox([Vec(3, -1, 5), Vec(-2, 4, 1), Vec(1, 2, 9)])
    assert box == BBox(Vec(-2, -1, 0), Vec(3, 4, 0))


def test_triangle_basis_axis_aligned():
    pts = [Vec(0, 0, 0), Vec(1, 0, 0), Vec(0, 1, 0)]
    uvs = [Vec(0, 0), Vec(1, 0), Vec(0, 1)]
    tangent, bitangent = triangle_basis(pts, uvs)
    assert tangent == Vec(1, 0, 0)
    assert bitangent == Vec(0, 1, 0)


def test_triangle_basis_degenerate_uvs_gives_nan():
    pts = [Vec(0, 0, 0), Vec(1, 0, 0), Vec(0, 1, 0)]
    uvs = [Vec(0, 0), Vec(0, 0), Vec(0, 0)]
    tangent, bitangent = triangle_basis(pts, uvs)
    assert [math.isnan(c) for c in tangent] == [True, True, True]
    assert [math.isnan(c) for c in bitangent] == [True, True, True]


def test_draw_triangle_fills_inside_only():
    ctx = _context()
    draw_triangle(_triangle(), FlatShader(), ctx)
    assert ctx.framebuffer.get(1, 1).bgra[:3] == [10, 20, 30]
    assert ctx.framebuffer.get(4, 4).bgra[:3] == [0, 0, 0]
    assert ctx.zbuffer[1 + 1 * 5] == 0.0
    assert ctx.zbuffer[4 + 4 * 5] == -math.inf


def test_draw_triangle_writes_normals():
    ctx = _context(normal_buffer=True)
    draw_triangle(_triangle(), FlatShader(), ctx)
    assert ctx.normal_buffer[1 + 1 * 5] == Vec(0, 0, 1)
    assert ctx.normal_buffer[4 + 4 * 5] == Vec(0, 0, 0)


def test_draw_triangle_respects_depth():
    ctx = _context(depth=1.0)
    draw_triangle(_triangle(), FlatShader(), ctx)
    assert ctx.framebuffer.get(1, 1).bgra[:3] == [0, 0, 0]
    assert ctx.zbuffer == [1.0] * 25


def test_draw_triangle_discard():
    ctx = _context()
    draw_triangle(_triangle(), FlatShader(discard=True), ctx)
    assert ctx.zbuffer == [-math.inf] * 25


def test_draw_model(tmp_path):
    path = tmp_path / "tri.obj"
    path.write_text(TRIANGLE_OBJ)
    ctx = _context()
    ctx.model = Model(path)
    draw_model(ctx, FlatShader())
    assert ctx.framebuffer.get(1, 1).bgra[:3] == [10, 20, 30]
    assert ctx.framebuffer.get(4, 4).bgra[:3] == [0, 0, 0]