import math

import numpy as np
import pytest

from rasteriser.camera import Camera, FaceIndex


def make_camera():
    return Camera(
        (0.0, 1.0, 4.0, 1.0),
        (0.0, 0.0, 0.0, 1.0),
        (0.0, 1.0, 0.0),
        80.0,
        0.1,
        10.0,
    )


def test_fov_stored_in_radians():
    assert make_camera().fov == pytest.approx(math.radians(80.0))


def test_view_proj_is_product():
    cam = make_camera()
    np.testing.assert_allclose(cam.view_proj_mat, cam.proj_mat @ cam.view_mat)


def test_view_matrix_moves_position_to_origin():
    cam = make_camera()
    np.testing.assert_allclose(cam.view_mat @ cam.position, [0.0, 0.0, 0.0, 1.0], atol=1e-12)


def test_move_to_takes_effect_after_rebuild():
    cam = make_camera()
    old_view = cam.view_mat.copy()
    cam.move_to((3.0, 0.5, -2.0, 1.0))
    np.testing.assert_allclose(cam.view_mat, old_view)
    cam.rebuild_mats()
    np.testing.assert_allclose(cam.view_mat @ cam.position, [0.0, 0.0, 0.0, 1.0], atol=1e-12)
    np.testing.assert_allclose(cam.view_proj_mat, cam.proj_mat @ cam.view_mat)


def test_look_at_sets_centre():
    cam = make_camera()
    cam.look_at((1.0, 0.0, 0.0, 1.0))
    cam.rebuild_mats()
    out = cam.view_mat @ cam.center
    assert out[0] == pytest.approx(0.0, abs=1e-12)
    assert out[1] == pytest.approx(0.0, abs=1e-12)
    assert out[2] < 0


def test_transform_position_applies_matrix():
    cam = make_camera()
    shift = np.identity(4)
    shift[:3, 3] = [1.0, 2.0, 3.0]
    before = cam.position.copy()
    cam.transform_position(shift)
    np.testing.assert_allclose(cam.position[:3], before[:3] + [1.0, 2.0, 3.0])


def test_transform_center_applies_matrix():
    cam = make_camera()
    shift = np.identity(4)
    shift[:3, 3] = [-1.0, 0.0, 0.5]
    cam.transform_center(shift)
    np.testing.assert_allclose(cam.center, [-1.0, 0.0, 0.5, 1.0])


def test_mvp_with_identity_model_is_view_proj():
    cam = make_camera()
    np.testing.assert_allclose(cam.build_mvp_transform(np.identity(4)), cam.view_proj_mat)


def test_normal_transform_of_rigid_view_keeps_rotation():
    cam = make_camera()
    normal = cam.build_normal_transform(np.identity(4))
    np.testing.assert_allclose(normal[:3, :3], cam.view_mat[:3, :3], atol=1e-12)


def test_normal_transform_rejects_singular_model():
    cam = make_camera()
    with pytest.raises(ValueError):
        cam.build_normal_transform(np.zeros((4, 4)))


def test_inverse_projection():
    cam = make_camera()
    np.testing.assert_allclose(
        cam.build_inv_view_transform() @ cam.proj_mat, np.identity(4), atol=1e-12
    )


def test_project_point_matches_matrix_product():
    cam = make_camera()
    mvp = cam.build_mvp_transform(np.identity(4))
    pt = np.array([0.3, -0.2, 0.5, 1.0])
    np.testing.assert_allclose(Camera.project_point(mvp, pt), mvp @ pt)


def test_transform_normal_keeps_unit_length_under_rigid_view():
    cam = make_camera()
    nt = cam.build_normal_transform(np.identity(4))
    out = Camera.transform_normal(nt, (0.0, 0.0, 1.0, 0.0))
    assert np.linalg.norm(out[:3]) == pytest.approx(1.0)
    assert out[3] == pytest.approx(0.0, abs=1e-12)


def test_face_index_is_immutable_value():
    a = FaceIndex(2, 5)
    assert a == FaceIndex(2, 5)
    assert (a.v, a.n) == (2, 5)
    with pytest.raises(AttributeError):
        a.v = 3