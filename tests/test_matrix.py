import pytest

from softraster.matrix import Matrix
from softraster.vector import EPSILON, Vec


def _close(a: Matrix, b: Matrix, tol: float = 1e-6) -> bool:
    return (a.rows, a.cols) == (b.rows, b.cols) and all(
        abs(x - y) <= tol for ca, cb in zip(a, b) for x, y in zip(ca, cb)
    )


def _upper3(m: Matrix) -> Matrix:
    return Matrix(Vec(m[c][r] for r in range(3)) for c in range(3))


IDENTITY3_FLAT = [1, 0, 0, 0, 1, 0, 0, 0, 1]


def test_identity_keeps_vector():
    res = Matrix.identity() @ Vec(1, 2, 3, 1)
    assert abs(res[0] - 1.0) < EPSILON
    assert res == Vec(1, 2, 3, 1)


def test_shear_moves_x_by_y():
    res = Matrix.shear(0.5, 0, 0, 0, 0, 0) @ Vec(0, 1, 0, 1)
    assert abs(res[0] - 0.5) < EPSILON


def test_diagonal_shape_and_values():
    m = Matrix.diagonal(3, 2, 7)
    assert (m.rows, m.cols) == (3, 2)
    assert m[0] == Vec(7, 0, 0)
    assert m[1] == Vec(0, 7, 0)


def test_ragged_columns_rejected():
    with pytest.raises(ValueError):
        Matrix([[1, 2], [3]])


def test_identity_is_neutral_for_products():
    m = Matrix.rotation_x(30) @ Matrix.translation(Vec(1, 2, 3))
    assert Matrix.identity() @ m == m
    assert m @ Matrix.identity() == m


def test_transpose_swaps_rows_and_columns():
    m = Matrix([[1, 2, 3], [4, 5, 6]])
    t = m.transpose()
    assert (t.rows, t.cols) == (2, 3)
    assert t[0] == Vec(1, 4)
    assert t.transpose() == m


def test_translation_moves_points_not_directions():
    t = Matrix.translation(Vec(1, 2, 3))
    assert t @ Vec(0, 0, 0, 1) == Vec(1, 2, 3, 1)
    assert t @ Vec(1, 0, 0, 0) == Vec(1, 0, 0, 0)


def test_scale():
    assert Matrix.scale(2, 3, 4) @ Vec(1, 1, 1, 1) == Vec(2, 3, 4, 1)


def test_rotation_z_maps_x_to_y():
    res = Matrix.rotation_z(90) @ Vec(1, 0, 0, 1)
    assert res[0] == pytest.approx(0, abs=1e-6)
    assert res[1] == pytest.approx(1)


@pytest.mark.parametrize("rotation", [Matrix.rotation_x, Matrix.rotation_y, Matrix.rotation_z])
def test_rotation_inverse_and_length(rotation):
    assert _close(rotation(35) @ rotation(-35), Matrix.identity())
    v = Vec(1, -2, 3, 0)
    assert (rotation(72) @ v).length() == pytest.approx(v.length())


def test_projection_divides_by_camera_distance():
    assert (Matrix.projection(3) @ Vec(0, 0, 3, 1)).w == pytest.approx(0)
    assert (Matrix.projection(3) @ Vec(0, 0, 0, 1)).w == 1


def test_viewport_maps_ndc_corners():
    vp = Matrix.viewport(10, 20, 100, 50)
    low = vp @ Vec(-1, -1, -1, 1)
    high = vp @ Vec(1, 1, 1, 1)
    assert (low.x, low.y, low.z) == pytest.approx((10, 20, 0))
    assert (high.x, high.y, high.z) == pytest.approx((110, 70, 1))


def test_lookat_moves_eye_to_origin():
    eye = Vec(0, 2, 6)
    view = Matrix.lookat(eye, Vec(0, 0, 0), Vec(0, 1, 0))
    assert tuple(view @ eye.homogeneous()) == pytest.approx((0, 0, 0, 1), abs=1e-6)
    centre = view @ Vec(0, 0, 0, 1)
    assert centre.z == pytest.approx(-eye.length())
    assert (centre.x, centre.y) == pytest.approx((0, 0), abs=1e-6)


def test_inverse_transpose_of_scale():
    res = Matrix.scale(2, 4, 8).inverse_transpose_3x3()
    assert (res.rows, res.cols) == (3, 3)
    product = res @ _upper3(Matrix.scale(2, 4, 8))
    assert [x for col in product for x in col] == pytest.approx(IDENTITY3_FLAT, abs=1e-6)


def test_inverse_transpose_inverts_block():
    m = Matrix.rotation_y(40) @ Matrix.rotation_z(15) @ Matrix.scale(1, 2, 3)
    res = m.inverse_transpose_3x3()
    assert (res.rows, res.cols) == (3, 3)
    product = res @ _upper3(m)
    assert [x for col in product for x in col] == pytest.approx(IDENTITY3_FLAT, abs=1e-6)


def test_inverse_transpose_of_singular_block_is_identity():
    assert Matrix.scale(0, 1, 1).inverse_transpose_3x3() == Matrix.identity(3)


def test_dimension_mismatch():
    with pytest.raises(ValueError):
        Matrix.identity() @ Vec(1, 2, 3)
    with pytest.raises(ValueError):
        Matrix.identity(3) @ Matrix.identity(4)