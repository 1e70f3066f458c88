# -*- coding: utf-8 -*-
import math

import pytest

from wgmath.math import scalar, EULER_ORDERS
from wgmath.math.vec3 import Vec3
from wgmath.math.mat3 import Mat3
from wgmath.math.mat4 import Mat4
from wgmath.math.quat import Quat

from conftest import assert_close, check_dst


def test_default_is_zero_identity_is_named():
    assert Quat().to_tuple() == (0.0, 0.0, 0.0, 0.0)
    assert Quat.identity().to_tuple() == (0.0, 0.0, 0.0, 1.0)
    dst = Quat(1, 2, 3, 4)
    assert Quat.identity(dst) is dst
    assert dst.to_tuple() == (0.0, 0.0, 0.0, 1.0)


def test_from_values_and_set():
    assert Quat.from_values(1, 2, 3, 4) == Quat(1, 2, 3, 4)
    dst = Quat()
    assert Quat.set(1, 2, 3, 4, dst) is dst
    assert dst.equals(Quat(1, 2, 3, 4))


def test_set_and_identity_on_instance_write_into_it():
    q = Quat(1, 2, 3, 4)
    assert q.identity() is q
    assert q.to_tuple() == (0.0, 0.0, 0.0, 1.0)
    assert q.set(5, 6, 7, 8) is q
    assert q.to_tuple() == (5.0, 6.0, 7.0, 8.0)
    dst = Quat()
    assert q.identity(dst) is dst
    assert q.to_tuple() == (5.0, 6.0, 7.0, 8.0)
    assert dst.to_tuple() == (0.0, 0.0, 0.0, 1.0)


def test_matmul_operator():
    a = Quat.from_euler(0.1, 0.2, 0.3, "xyz")
    b = Quat.from_axis_angle((0, 0, 1), 0.5)
    assert (a @ b).equals(a.multiply(b))
    assert (Quat.identity() @ b).equals_approximately(b)
    with pytest.raises(TypeError):
        a @ Vec3(1, 0, 0)


@pytest.mark.parametrize("order", EULER_ORDERS)
def test_from_euler_is_unit(order):
    q = Quat.from_euler(1.1, 2.2, 3.3, order)
    assert q.length() == pytest.approx(1.0, abs=1e-6)


@pytest.mark.parametrize("order", EULER_ORDERS)
def test_from_euler_composes_axis_rotations_in_order(order):
    angles = (0.3, -0.7, 1.9)
    axes = {"x": (1, 0, 0), "y": (0, 1, 0), "z": (0, 0, 1)}
    expected = Quat.identity()
    for letter in order:
        idx = "xyz".index(letter)
        expected = expected.multiply(Quat.from_axis_angle(axes[letter], angles[idx]))
    assert Quat.from_euler(*angles, order).equals_approximately(expected)


def test_from_euler_xyz_closed_form():
    x, y, z = 0.1, 0.2, 0.3
    sx, cx = math.sin(x / 2), math.cos(x / 2)
    sy, cy = math.sin(y / 2), math.cos(y / 2)
    sz, cz = math.sin(z / 2), math.cos(z / 2)
    expected = (
        sx * cy * cz + cx * sy * sz,
        cx * sy * cz - sx * cy * sz,
        cx * cy * sz + sx * sy * cz,
        cx * cy * cz - sx * sy * sz,
    )
    assert_close(expected, Quat.from_euler(x, y, z, "xyz"))


def test_from_euler_order_is_intrinsic():
    half_pi = math.pi / 2
    v = Vec3(1, 0, 0)
    # xyz: сначала X, затем Y в повёрнутой системе => на вектор сперва действует Y
    assert_close((0, 1, 0), v.transform_quat(Quat.from_euler(half_pi, half_pi, 0, "xyz")))
    assert_close((0, 0, -1), v.transform_quat(Quat.from_euler(half_pi, half_pi, 0, "yxz")))


def test_from_euler_unknown_order():
    with pytest.raises(ValueError):
        Quat.from_euler(0, 0, 0, "xxy")


def test_from_euler_dst():
    dst = Quat()
    assert Quat.from_euler(0.1, 0.2, 0.3, "zyx", dst) is dst
    assert dst.equals(Quat.from_euler(0.1, 0.2, 0.3, "zyx"))


def test_from_axis_angle():
    q = Quat.from_axis_angle(Vec3(0, 2, 0), math.pi / 2)
    assert_close((0, math.sin(math.pi / 4), 0, math.cos(math.pi / 4)), q)
    assert Quat.from_axis_angle((0, 0, 0), 1.0).equals(Quat.identity())


def test_to_axis_angle_round_trip():
    axis, angle = Quat.from_axis_angle((0, 0, 1), 1.2).to_axis_angle()
    assert_close((0, 0, 1), axis)
    assert angle == pytest.approx(1.2, abs=1e-6)


def test_multiply():
    a = Quat.from_euler(0.1, 0.2, 0.3, "xyz")
    b = Quat.from_euler(-0.4, 0.5, 1.6, "zxy")
    expected = a.multiply(b)
    check_dst(lambda p, q, d: p.multiply(q, d), expected, a, b)
    assert (a * b).equals(expected)
    # некоммутативность
    assert not b.multiply(a).equals_approximately(expected)


def test_multiply_matches_matrix_composition():
    a = Quat.from_euler(0.1, 0.2, 0.3, "xyz")
    b = Quat.from_euler(-0.4, 0.5, 1.6, "zxy")
    v = Vec3(1, 2, 3)
    via_quat = v.transform_quat(a.multiply(b))
    via_mat = v.transform_mat4(Mat4.from_quat(a).multiply(Mat4.from_quat(b)))
    assert via_quat.equals_approximately(via_mat, 1e-5)


def test_conjugate_inverse():
    q = Quat.from_euler(0.3, 0.2, 0.1, "yzx")
    check_dst(lambda p, d: p.conjugate(d), Quat(-q.x, -q.y, -q.z, q.w), q)
    check_dst(lambda p, d: p.inverse(d), q.conjugate(), q)
    assert q.multiply(q.inverse()).equals_approximately(Quat.identity())
    assert Quat().inverse().equals(Quat())


def test_normalize():
    check_dst(lambda p, d: p.normalize(d), Quat(0, 0.6, 0, 0.8), Quat(0, 3, 0, 4))
    assert Quat().normalize().equals(Quat.identity())


def test_dot_length():
    q = Quat(1, 2, 3, 4)
    assert q.dot(Quat(1, 1, 1, 1)) == 10.0
    assert q.length_sq() == 30.0
    assert q.len() == pytest.approx(math.sqrt(30))


def test_add_subtract_scale_lerp():
    a, b = Quat(1, 2, 3, 4), Quat(2, 4, 6, 8)
    check_dst(lambda p, q, d: p.add(q, d), Quat(3, 6, 9, 12), a, b)
    check_dst(lambda p, q, d: p.subtract(q, d), Quat(-1, -2, -3, -4), a, b)
    check_dst(lambda p, k, d: p.mul_scalar(k, d), Quat(2, 4, 6, 8), a, 2.0)
    check_dst(lambda p, q, t, d: p.lerp(q, t, d), Quat(1.5, 3, 4.5, 6), a, b, 0.5)


def test_slerp():
    a = Quat.identity()
    b = Quat.from_axis_angle((0, 0, 1), math.pi / 2)
    expected = Quat.from_axis_angle((0, 0, 1), math.pi / 4)
    check_dst(lambda p, q, t, d: p.slerp(q, t, d), expected, a, b, 0.5)
    assert a.slerp(b, 0.0).equals_approximately(a)
    assert a.slerp(b, 1.0).equals_approximately(b)


def test_slerp_takes_short_path():
    a = Quat.identity()
    b = Quat.from_axis_angle((0, 0, 1), math.pi / 2).mul_scalar(-1)
    mid = a.slerp(b, 0.5)
    assert_close((1, 0, 0), Vec3(1, 0, 0).transform_quat(mid).rotate_z(Vec3(), -math.pi / 4))


def test_slerp_nearly_equal_falls_back_to_lerp():
    a = Quat.identity()
    assert a.slerp(a.copy(), 0.3).equals_approximately(a)


def test_rotate_axes():
    q = Quat.from_euler(0.2, 0.4, 0.6, "xyz")
    check_dst(lambda p, a, d: p.rotate_x(a, d), q.multiply(Quat.from_axis_angle((1, 0, 0), 0.5)), q, 0.5)
    check_dst(lambda p, a, d: p.rotate_y(a, d), q.multiply(Quat.from_axis_angle((0, 1, 0), 0.5)), q, 0.5)
    check_dst(lambda p, a, d: p.rotate_z(a, d), q.multiply(Quat.from_axis_angle((0, 0, 1), 0.5)), q, 0.5)


def test_angle_between_rotations():
    a = Quat.identity()
    b = Quat.from_axis_angle((0, 1, 0), 0.8)
    assert a.angle(b) == pytest.approx(0.8, abs=1e-6)
    assert a.angle(a) == 0.0


@pytest.mark.parametrize("order", EULER_ORDERS)
def test_from_mat_round_trip(order):
    q = Quat.from_euler(0.3, -1.2, 2.5, order)
    for m in (Mat4.from_quat(q), Mat3.from_quat(q)):
        back = Quat.from_mat(m)
        if back.dot(q) < 0:
            back = back.mul_scalar(-1)
        assert back.equals_approximately(q, 2e-6)


def test_from_mat_dst():
    q = Quat.from_euler(0.1, 0.2, 0.3)
    dst = Quat()
    assert Quat.from_mat(Mat3.from_quat(q), dst) is dst


def test_rotation_to():
    a, b = Vec3(1, 0, 0), Vec3(0, 1, 0)
    assert_close((0, 1, 0), a.transform_quat(Quat.rotation_to(a, b)))
    opposite = Quat.rotation_to(a, Vec3(-1, 0, 0))
    assert_close((-1, 0, 0), a.transform_quat(opposite))
    assert Quat.rotation_to(a, a).equals(Quat.identity())


def test_rotate_vector_and_operator():
    q = Quat.from_axis_angle((0, 1, 0), math.pi / 2)
    assert_close((0, 0, -1), q.rotate_vector((1, 0, 0)))
    assert_close((0, 0, -1), q * Vec3(1, 0, 0))


def test_to_matrices():
    q = Quat.from_euler(0.5, 0.25, -0.75, "zxy")
    v = Vec3(3, -2, 1)
    expected = v.transform_quat(q)
    assert v.transform_mat3(q.to_mat3()).equals_approximately(expected, 1e-5)
    assert v.transform_mat4(q.to_mat4()).equals_approximately(expected, 1e-5)


def test_equals_approximately_respects_epsilon():
    assert Quat(0, 0, 0, 1).equals_approximately(Quat(0, 0, 0, 1 + 1e-7))
    assert not Quat(0, 0, 0, 1).equals_approximately(Quat(0, 0, 0, 1.001))
    assert Quat(0, 0, 0, 1).equals_approximately(Quat(0, 0, 0, 1.001), eps=scalar.EPSILON * 2000)
