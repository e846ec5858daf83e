"""Shared test fixtures for the seamcarve test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


@pytest.fixture
def random_image():
    """Seeded 12x18 RGB image."""
    torch.manual_seed(42)
    return torch.rand(3, 12, 18)


def make_uniform_image(H, W, value=128 / 255):
    """Every channel of every pixel set to `value`."""
    return torch.full((3, H, W), value, dtype=torch.float32)


def make_impulse_image(H, W, y, x):
    """Black image with a single white pixel at (y, x)."""
    img = torch.zeros(3, H, W)
    img[:, y, x] = 1.0
    return img


def make_bar_image(H, W, cols):
    """Black image with a full-height white bar over `cols`."""
    img = torch.zeros(3, H, W)
    for c in cols:
        img[:, :, c] = 1.0
    return img


def is_subsequence(short, long):
    """True if the pixels of `short` appear in `long` in the same order.

    Both are (3, N) column lists for one row.
    """
    j = 0
    for i in range(long.shape[1]):
        if j < short.shape[1] and torch.equal(short[:, j], long[:, i]):
            j += 1
    return j == short.shape[1]
