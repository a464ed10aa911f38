"""Column-major matrices and the standard 4x4 transforms."""

from __future__ import annotations

import math

from .vector import EPSILON, Vec, angle_to_radians, cross


def _identity_grid(size: int) -> list[list[float]]:
    return [[1.0 if r == c else 0.0 for r in range(size)] for c in range(size)]


class Matrix:
    """An immutable matrix stored as a sequence of column vectors."""

    __slots__ = ("_columns",)

    def __init__(self, columns) -> None:
        cols = tuple(c if isinstance(c, Vec) else Vec(c) for c in columns)
        if not cols:
            raise ValueError("a matrix needs at least one column")
        if any(len(c) != len(cols[0]) for c in cols):
            raise ValueError("all matrix columns must have the same size")
        self._columns = cols

    @classmethod
    def diagonal(cls, rows: int, cols: int, value: float) -> Matrix:
        return cls(
            Vec(value if r == c else 0.0 for r in range(rows)) for c in range(cols)
        )

    @classmethod
    def identity(cls, size: int = 4) -> Matrix:
        return cls.diagonal(size, size, 1.0)

    @classmethod
    def translation(cls, v: Vec) -> Matrix:
        grid = _identity_grid(4)
        grid[3][0], grid[3][1], grid[3][2] = v.x, v.y, v.z
        return cls(grid)

    @classmethod
    def scale(cls, sx: float, sy: float, sz: float) -> Matrix:
        grid = _identity_grid(4)
        grid[0][0], grid[1][1], grid[2][2] = sx, sy, sz
        return cls(grid)

    @classmethod
    def lookat(cls, eye: Vec, center: Vec, up: Vec) -> Matrix:
        z = (eye - center).normalize()
        x = cross(up, z).normalize()
        y = cross(z, x).normalize()
        basis = _identity_grid(4)
        move = _identity_grid(4)
        for i in range(3):
            basis[i][0], basis[i][1], basis[i][2] = x[i], y[i], z[i]
            move[3][i] = -eye[i]
        return cls(basis) @ cls(move)

    @classmethod
    def projection(cls, camera_dist: float) -> Matrix:
        grid = _identity_grid(4)
        grid[2][3] = -1.0 / camera_dist
        return cls(grid)

    @classmethod
    def rotation_x(cls, angle: float) -> Matrix:
        rad = angle_to_radians(angle)
        s, c = math.sin(rad), math.cos(rad)
        grid = _identity_grid(4)
        grid[1][1], grid[2][1] = c, -s
        grid[1][2], grid[2][2] = s, c
        return cls(grid)

    @classmethod
    def rotation_y(cls, angle: float) -> Matrix:
        rad = angle_to_radians(angle)
        s, c = math.sin(rad), math.cos(rad)
        grid = _identity_grid(4)
        grid[0][0], grid[2][0] = c, s
        grid[0][2], grid[2][2] = -s, c
        return cls(grid)

    @classmethod
    def rotation_z(cls, angle: float) -> Matrix:
        rad = angle_to_radians(angle)
        s, c = math.sin(rad), math.cos(rad)
        grid = _identity_grid(4)
        grid[0][0], grid[1][0] = c, -s
        grid[0][1], grid[1][1] = s, c
        return cls(grid)

    @classmethod
    def shear(cls, xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
        grid = _identity_grid(4)
        grid[1][0], grid[2][0] = xy, xz
        grid[0][1], grid[2][1] = yx, yz
        grid[0][2], grid[1][2] = zx, zy
        return cls(grid)

    @classmethod
    def viewport(cls, x: float, y: float, w: float, h: float) -> Matrix:
        grid = _identity_grid(4)
        grid[0][0] = w / 2.0
        grid[1][1] = h / 2.0
        grid[2][2] = 0.5
        grid[3][0] = x + w / 2.0
        grid[3][1] = y + h / 2.0
        grid[3][2] = 0.5
        return cls(grid)

    @property
    def rows(self) -> int:
        return len(self._columns[0])

    @property
    def cols(self) -> int:
        return len(self._columns)

    def __getitem__(self, index: int) -> Vec:
        """The column at the given index."""
        return self._columns[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._columns == other._columns

    def __hash__(self) -> int:
        return hash(self._columns)

    def __repr__(self) -> str:
        return f"Matrix({[tuple(c) for c in self._columns]!r})"

    def __matmul__(self, other):
        if isinstance(other, Vec):
            if len(other) != self.cols:
                raise ValueError(
                    f"cannot multiply a {self.rows}x{self.cols} matrix "
                    f"by a {len(other)}-component vector"
                )
            return Vec(
                sum(col[r] * k for col, k in zip(self._columns, other))
                for r in range(self.rows)
            )
        if isinstance(other, Matrix):
            if other.rows != self.cols:
                raise ValueError(
                    f"cannot multiply {self.rows}x{self.cols} "
                    f"by {other.rows}x{other.cols}"
                )
            return Matrix(self @ col for col in other._columns)
        return NotImplemented

    def transpose(self) -> Matrix:
        return Matrix(
            Vec(col[r] for col in self._columns) for r in range(self.rows)
        )

    def inverse_transpose_3x3(self) -> Matrix:
        """The 3x3 normal matrix built from the upper-left 3x3 block.

        A nearly singular block yields the 3x3 identity.
        """
        if self.rows < 3 or self.cols < 3:
            raise ValueError("the matrix needs at least a 3x3 block")
        c = self._columns
        m00, m01, m02 = c[0][0], c[1][0], c[2][0]
        m10, m11, m12 = c[0][1], c[1][1], c[2][1]
        m20, m21, m22 = c[0][2], c[1][2], c[2][2]

        det = (
            m00 * (m11 * m22 - m12 * m21)
            - m01 * (m10 * m22 - m12 * m20)
            + m02 * (m10 * m21 - m11 * m20)
        )
        if abs(det) < EPSILON:
            return Matrix.identity(3)
        inv = 1.0 / det
        return Matrix(
            [
                [
                    (m11 * m22 - m12 * m21) * inv,
                    -(m10 * m22 - m12 * m20) * inv,
                    (m10 * m21 - m11 * m20) * inv,
                ],
                [
                    -(m01 * m22 - m02 * m21) * inv,
                    (m00 * m22 - m02 * m20) * inv,
                    -(m00 * m21 - m01 * m20) * inv,
                ],
                [
                    (m01 * m12 - m02 * m11) * inv,
                    -(m00 * m12 - m02 * m10) * inv,
                    (m00 * m11 - m01 * m10) * inv,
                ],
            ]
        )