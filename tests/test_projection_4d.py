import numpy as np
import pytest

from projection_4d import PROJECTION_EPSILON, perspective_factor, project_to_3d, w_display_factor


@pytest.mark.parametrize("radius", [0.5, 1.0, 5.0])
def test_origin_projects_to_origin(radius):
    np.testing.assert_allclose(project_to_3d(np.zeros(4), radius), [0.0, 0.0, 0.0])


@pytest.mark.parametrize("radius", [0.5, 1.0, 5.0])
def test_w_zero_is_unscaled(radius):
    np.testing.assert_allclose(project_to_3d([radius, 0.0, 0.0, 0.0], radius), [radius, 0.0, 0.0])


def test_positive_w_shrinks():
    # w = r gives factor 1/2
    np.testing.assert_allclose(project_to_3d([2.0, -4.0, 6.0, 5.0], 5.0), [1.0, -2.0, 3.0])


def test_batch_projection_shape():
    points = np.array([[1.0, 0.0, 0.0, 0.0], [0.0, 1.0, 0.0, 0.5], [0.0, 0.0, 1.0, -0.5]])
    projected = project_to_3d(points, 1.0)
    assert projected.shape == (3, 3)
    np.testing.assert_allclose(projected[1], [0.0, 1.0 / 1.5, 0.0])
    np.testing.assert_allclose(projected[2], [0.0, 0.0, 2.0])


def test_singularity_is_clamped():
    # w = -r would divide by zero
    projected = project_to_3d([1.0, 1.0, 1.0, -2.0], 2.0)
    assert np.all(np.isfinite(projected))
    np.testing.assert_allclose(projected, [1.0 / PROJECTION_EPSILON] * 3)
    assert float(perspective_factor(-2.0, 2.0)) == pytest.approx(1.0 / PROJECTION_EPSILON)


def test_singularity_clamp_is_deterministic():
    a = project_to_3d([0.3, -0.1, 0.2, -1.0], 1.0)
    b = project_to_3d([0.3, -0.1, 0.2, -1.0], 1.0)
    np.testing.assert_array_equal(a, b)


def test_w_display_factor():
    points = np.array([[0, 0, 0, -2.0], [0, 0, 0, 0.0], [0, 0, 0, 2.0], [0, 0, 0, 2.5]])
    np.testing.assert_allclose(w_display_factor(points, 2.0), [0.0, 0.5, 1.0, 1.0])
