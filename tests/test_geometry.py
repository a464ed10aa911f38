import pytest

from softraster.geometry import BBox, Face
from softraster.vector import Vec

VERTICES = [Vec(0, 0, 0), Vec(1, 0, 0), Vec(0, 1, 0), Vec(0, 0, 1)]
NORMALS = [Vec(0, 0, 1), Vec(0, 1, 0)]
TEXTURES = [Vec(0, 0), Vec(1, 0), Vec(0, 1)]


def test_bbox_holds_corners():
    box = BBox(Vec(0, 1, 0), Vec(2, 3, 0))
    assert box.box_min == Vec(0, 1, 0)
    assert box.box_max == Vec(2, 3, 0)


def test_new_face_has_zero_attributes():
    face = Face([0, 1, 2], [0, 0, 0], [0, 1, 2])
    assert face.pts == (Vec(0, 0, 0),) * 3
    assert face.uv == (Vec(0, 0),) * 3


def test_update_resolves_indices():
    face = Face([3, 1, 2], [1, 0, 1], [2, 0, 1])
    face.update(VERTICES, NORMALS, TEXTURES)
    assert face.pts == (VERTICES[3], VERTICES[1], VERTICES[2])
    assert face.normals == (NORMALS[1], NORMALS[0], NORMALS[1])
    assert face.uv == (TEXTURES[2], TEXTURES[0], TEXTURES[1])


def test_indices_are_stored():
    face = Face((0, 1, 2), (1, 1, 0), (2, 1, 0))
    assert face.vertex_indices == (0, 1, 2)
    assert face.normal_indices == (1, 1, 0)
    assert face.texture_indices == (2, 1, 0)


@pytest.mark.parametrize(
    "indices",
    [
        ([0, 1, 9], [0, 0, 0], [0, 0, 0]),
        ([0, 1, 2], [0, 5, 0], [0, 0, 0]),
        ([0, 1, 2], [0, 0, 0], [-1, 0, 0]),
    ],
)
def test_update_out_of_range(indices):
    face = Face(*indices)
    with pytest.raises(IndexError):
        face.update(VERTICES, NORMALS, TEXTURES)


def test_face_needs_three_indices():
    with pytest.raises(ValueError):
        Face([0, 1], [0, 0, 0], [0, 0, 0])