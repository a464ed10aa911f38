"""Loading triangle meshes from Wavefront OBJ files."""

from __future__ import annotations

import os

from .geometry import Face
from .vector import Vec


def _floats(args: list[str], count: int, kind: str, line_no: int) -> list[float]:
    if len(args) < count:
        raise ValueError(
            f"line {line_no}: '{kind}' needs {count} numbers, got {len(args)}"
        )
    try:
        return [float(a) for a in args[:count]]
    except ValueError as exc:
        raise ValueError(f"line {line_no}: bad number in '{kind}' entry") from exc


def _corner(token: str, line_no: int) -> tuple[int, int, int]:
    """Parse a 'v/vt/vn' face corner into zero-based indices."""
    parts = token.split("/")
    try:
        v, vt, vn = (int(p) for p in parts[:3])
    except ValueError as exc:
        raise ValueError(
            f"line {line_no}: face corner {token!r} is not of the form v/vt/vn"
        ) from exc
    return v - 1, vt - 1, vn - 1


class Model:
    """A mesh of triangles with positions, normals and texture coordinates."""

    def __init__(self, path: str | os.PathLike) -> None:
        self._faces: list[Face] = []
        self._vertices: list[Vec] = []
        self._normals: list[Vec] = []
        self._textures: list[Vec] = []
        with open(path, encoding="utf-8", errors="replace") as stream:
            for line_no, line in enumerate(stream, 1):
                self._parse_line(line, line_no)
        for face in self._faces:
            face.update(self._vertices, self._normals, self._textures)

    def _parse_line(self, line: str, line_no: int) -> None:
        words = line.split()
        if not words:
            return
        kind, args = words[0], words[1:]
        if kind == "v":
            self._vertices.append(Vec(_floats(args, 3, kind, line_no)))
        elif kind == "vn":
            self._normals.append(Vec(_floats(args, 3, kind, line_no)))
        elif kind == "vt":
            self._textures.append(Vec(_floats(args, 2, kind, line_no)))
        elif kind == "f":
            if len(args) < 3:
                raise ValueError(f"line {line_no}: a face needs three corners")
            corners = [_corner(token, line_no) for token in args[:3]]
            self._faces.append(
                Face(
                    [c[0] for c in corners],
                    [c[2] for c in corners],
                    [c[1] for c in corners],
                )
            )

    @property
    def faces(self) -> list[Face]:
        return self._faces

    @property
    def vertices(self) -> list[Vec]:
        return self._vertices

    @property
    def normals(self) -> list[Vec]:
        return self._normals

    @property
    def textures(self) -> list[Vec]:
        return self._textures