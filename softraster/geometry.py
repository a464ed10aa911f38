"""Bounding boxes and triangle faces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .vector import Vec


@dataclass(frozen=True)
class BBox:
    """An axis-aligned box given by its minimum and maximum corners."""

    box_min: Vec
    box_max: Vec


def _triple(indices, what: str) -> tuple[int, int, int]:
    values = tuple(int(i) for i in indices)
    if len(values) != 3:
        raise ValueError(f"a face needs three {what} indices, got {len(values)}")
    return values


def _pick(items: Sequence, index: int, what: str):
    if not 0 <= index < len(items):
        raise IndexError(f"{what} index {index} out of range for {len(items)} entries")
    return items[index]


class Face:
    """A triangle: zero-based indices plus the attributes they resolve to."""

    __slots__ = (
        "vertex_indices",
        "normal_indices",
        "texture_indices",
        "pts",
        "normals",
        "uv",
    )

    def __init__(self, vertex_indices, normal_indices, texture_indices) -> None:
        self.vertex_indices = _triple(vertex_indices, "vertex")
        self.normal_indices = _triple(normal_indices, "normal")
        self.texture_indices = _triple(texture_indices, "texture")
        zero3 = Vec(0, 0, 0)
        self.pts: tuple[Vec, Vec, Vec] = (zero3, zero3, zero3)
        self.normals: tuple[Vec, Vec, Vec] = (zero3, zero3, zero3)
        zero2 = Vec(0, 0)
        self.uv: tuple[Vec, Vec, Vec] = (zero2, zero2, zero2)

    def update(self, vertices: Sequence[Vec], normals: Sequence[Vec], textures: Sequence[Vec]) -> None:
        """Resolve the indices against the model's attribute lists."""
        self.pts = tuple(_pick(vertices, i, "vertex") for i in self.vertex_indices)
        self.normals = tuple(_pick(normals, i, "normal") for i in self.normal_indices)
        self.uv = tuple(_pick(textures, i, "texture") for i in self.texture_indices)

    def __repr__(self) -> str:
        return (
            f"Face(vertex_indices={self.vertex_indices}, "
            f"normal_indices={self.normal_indices}, "
            f"texture_indices={self.texture_indices})"
        )