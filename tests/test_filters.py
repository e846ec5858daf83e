"""Tests for the grayscale / blur / Sobel filter stage."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest
from seamcarve.filters import (grayscale, gaussian_blur, sobel, apply_filters,
                               intensity_map)

from conftest import make_uniform_image, make_impulse_image, make_bar_image


class TestGrayscale:
    def test_weights_per_channel(self):
        """Pure red, green and blue pixels map to their luminance weights."""
        image = torch.zeros(3, 1, 3)
        image[0, 0, 0] = 1.0
        image[1, 0, 1] = 1.0
        image[2, 0, 2] = 1.0
        gray = grayscale(image)
        expected = torch.tensor([0.216, 0.7125, 0.0722])
        for c in range(3):
            assert torch.allclose(gray[c, 0], expected, atol=1e-6)

    def test_channels_are_equal(self, random_image):
        gray = grayscale(random_image)
        assert torch.equal(gray[0], gray[1])
        assert torch.equal(gray[0], gray[2])

    def test_weights_do_not_sum_to_one(self):
        """A white pixel becomes slightly brighter than 1.0."""
        gray = grayscale(torch.ones(3, 2, 2))
        assert torch.allclose(gray, torch.full((3, 2, 2), 1.0007), atol=1e-6)

    def test_input_not_modified(self, random_image):
        before = random_image.clone()
        grayscale(random_image)
        assert torch.equal(random_image, before)

    def test_rejects_non_rgb(self):
        with pytest.raises(ValueError):
            grayscale(torch.rand(20, 20))


class TestGaussianBlur:
    def test_impulse_reproduces_kernel(self):
        """Blurring a single bright red pixel spreads the kernel around it."""
        image = make_impulse_image(5, 5, 2, 2)
        blurred = gaussian_blur(image)[0]
        expected = torch.tensor([
            [1 / 16, 1 / 8, 1 / 16],
            [1 / 8, 1 / 4, -1 / 8],
            [1 / 16, 1 / 8, 1 / 16],
        ])
        assert torch.allclose(blurred[1:4, 1:4], expected, atol=1e-6)
        # Nothing leaks further than one pixel
        assert blurred[0].abs().max() == 0
        assert blurred[:, 4].abs().max() == 0

    def test_pixel_right_of_impulse_is_negative(self):
        """The left neighbour carries weight -1/8."""
        image = make_impulse_image(3, 3, 1, 0)
        blurred = gaussian_blur(image)[0]
        assert blurred[1, 1].item() == pytest.approx(-0.125)

    def test_uniform_interior_scaled(self):
        """Kernel weights sum to 0.75, so a flat field dims in the interior."""
        image = make_uniform_image(6, 6, 0.8)
        blurred = gaussian_blur(image)[0]
        assert torch.allclose(blurred[1:-1, 1:-1], torch.full((4, 4), 0.6), atol=1e-6)

    def test_borders_omit_missing_neighbours(self):
        """No padding or renormalisation: edges get a partial sum."""
        image = make_uniform_image(3, 3, 1.0)
        blurred = gaussian_blur(image)[0]
        expected = torch.tensor([
            [0.5625, 0.5, 0.3125],
            [0.75, 0.75, 0.5],
            [0.5625, 0.5, 0.3125],
        ])
        assert torch.allclose(blurred, expected, atol=1e-6)

    def test_reads_red_channel_only(self):
        image = torch.zeros(3, 4, 4)
        image[1:] = 1.0
        assert gaussian_blur(image).abs().max() == 0

    def test_output_shape(self, random_image):
        assert gaussian_blur(random_image).shape == random_image.shape


class TestSobel:
    def test_uniform_interior_is_zero(self):
        """A flat field has no interior gradient."""
        image = make_uniform_image(7, 7, 0.3)
        edges = sobel(image)
        assert edges[:, 1:-1, 1:-1].abs().max() < 1e-6

    def test_uniform_border_is_not_zero(self):
        """Omitted neighbours make the image border look like an edge."""
        image = make_uniform_image(7, 7, 0.3)
        edges = sobel(image)[0]
        assert edges[0].min() > 0
        assert edges[:, 0].min() > 0

    def test_black_image_is_zero(self):
        assert sobel(torch.zeros(3, 5, 5)).abs().max() == 0

    def test_vertical_edge_saturates(self):
        image = make_bar_image(6, 8, range(4, 8))
        edges = sobel(image)[0]
        assert torch.allclose(edges[1:-1, 3:5], torch.ones(4, 2))
        assert edges[1:-1, 1].abs().max() == 0

    def test_clamped_to_unit_range(self, random_image):
        edges = sobel(random_image)
        assert edges.min() >= 0.0
        assert edges.max() <= 1.0

    def test_channels_are_equal(self, random_image):
        edges = sobel(random_image)
        assert torch.equal(edges[0], edges[1])
        assert torch.equal(edges[0], edges[2])


class TestPipeline:
    def test_output_shape(self, random_image):
        assert apply_filters(random_image).shape == random_image.shape

    def test_intensity_dtype_and_range(self, random_image):
        intensity = intensity_map(apply_filters(random_image))
        assert intensity.dtype == torch.int64
        assert intensity.shape == (12, 18)
        assert intensity.min() >= 0
        assert intensity.max() <= 255

    def test_intensity_rounds(self):
        filtered = torch.zeros(3, 1, 3)
        filtered[0] = torch.tensor([[0.4 / 255, 1.6 / 255, 1.0]])
        assert intensity_map(filtered).tolist() == [[0, 2, 255]]

    def test_uniform_gray_energy(self):
        """A flat 3x3 field is low-energy only in the centre."""
        image = make_uniform_image(3, 3, 128 / 255)
        intensity = intensity_map(apply_filters(image))
        assert intensity.tolist() == [
            [255, 255, 255],
            [255, 128, 255],
            [255, 255, 255],
        ]

    def test_single_bright_pixel_energy(self):
        """Energy surrounds an isolated bright pixel but dips on top of it."""
        image = make_impulse_image(3, 3, 1, 1)
        intensity = intensity_map(apply_filters(image))
        assert intensity.tolist() == [
            [180, 143, 128],
            [191, 128, 191],
            [180, 143, 128],
        ]
