import numpy as np
import pytest

from rasteriser.bloom import apply_bloom, gaussian_kernel_2d


@pytest.mark.parametrize("radius,sigma", [(0, 1.0), (2, 1.5), (5, 32.0)])
def test_kernel_shape_and_sum(radius, sigma):
    kernel = gaussian_kernel_2d(radius, sigma)
    assert kernel.shape == (2 * radius + 1, 2 * radius + 1)
    assert np.isclose(kernel.sum(), 1.0)


def test_kernel_is_symmetric_with_peak_at_centre():
    kernel = gaussian_kernel_2d(3, 1.2)
    assert np.allclose(kernel, kernel.T)
    assert np.allclose(kernel, kernel[::-1, ::-1])
    assert kernel.argmax() == kernel.size // 2


def test_kernel_radius_zero_is_unit():
    assert np.array_equal(gaussian_kernel_2d(0, 3.0), np.array([[1.0]]))


def test_kernel_negative_radius_rejected():
    with pytest.raises(ValueError):
        gaussian_kernel_2d(-1, 1.0)


def test_black_image_stays_black():
    image = np.zeros((6, 5, 3), dtype=np.uint8)
    result = apply_bloom(image, gaussian_kernel_2d(2, 1.0), 0.32, 1.0)
    assert result.shape == image.shape
    assert result.dtype == np.uint8
    assert not result.any()


def test_dark_pixels_are_unchanged():
    image = np.full((4, 4, 3), 20, dtype=np.uint8)
    result = apply_bloom(image, gaussian_kernel_2d(1, 1.0), 0.32, 1.0)
    assert np.array_equal(result, image)


def test_zero_strength_leaves_image_unchanged():
    image = np.full((4, 4, 3), 200, dtype=np.uint8)
    result = apply_bloom(image, gaussian_kernel_2d(1, 1.0), 0.32, 0.0)
    assert np.array_equal(result, image)


def test_bright_image_saturates():
    image = np.full((4, 4, 3), 255, dtype=np.uint8)
    result = apply_bloom(image, gaussian_kernel_2d(1, 1.0), 0.32, 1.0)
    assert np.array_equal(result, np.full((4, 4, 3), 255, dtype=np.uint8))
    assert int(result.min()) == 255


def test_unit_kernel_doubles_bright_pixel():
    image = np.zeros((3, 3, 3), dtype=np.uint8)
    image[1, 1] = 100
    result = apply_bloom(image, np.array([[1.0]]), 0.1, 1.0)
    assert result[1, 1].tolist() == [200, 200, 200]
    assert result[0, 0].tolist() == [0, 0, 0]


def test_bloom_spreads_to_neighbours_and_never_darkens():
    image = np.zeros((7, 7, 3), dtype=np.uint8)
    image[3, 3] = 250
    result = apply_bloom(image, gaussian_kernel_2d(2, 1.0), 0.32, 1.0)
    assert np.all(result >= image)
    assert result[3, 4, 0] > 0
    assert result[0, 0, 0] == 0


@pytest.mark.parametrize("kernel", [np.ones((2, 2)), np.ones((3, 5)), np.ones(3)])
def test_bad_kernel_rejected(kernel):
    with pytest.raises(ValueError):
        apply_bloom(np.zeros((2, 2, 3), dtype=np.uint8), kernel, 0.3, 1.0)


def test_bad_image_shape_rejected():
    with pytest.raises(ValueError):
        apply_bloom(np.zeros((2, 2), dtype=np.uint8), np.ones((1, 1)), 0.3, 1.0)