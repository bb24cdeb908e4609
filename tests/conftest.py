"""Shared pytest fixtures for the fuzzy_segment test suite.

Fixtures:
    diagonal_contour: seven collinear integer points on y = x
    l_contour: open contour along a horizontal then a vertical side
    square_contour: closed contour of the border of a 4x4 square
    noisy_contour: factory for a seeded integer random walk around a line
    rect_image: 100x100 BGR image with a dark filled rectangle

Markers:
    slow: Mark test as slow-running (skip with -m "not slow")
    integration: Mark test as integration test
"""

import logging

import cv2
import numpy as np
import pytest


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as slow-running (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def restore_package_logger():
    """Undo setup_logging() calls made by a test (CLI runs included)."""
    logger = logging.getLogger("fuzzy_segment")
    level, handlers = logger.level, list(logger.handlers)
    yield
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


# -----------------------------------------------------------------------------
# Contours
# -----------------------------------------------------------------------------

@pytest.fixture
def diagonal_contour():
    return [(i, i) for i in range(7)]


@pytest.fixture
def l_contour():
    """(0,0)..(5,0) then (5,1)..(5,5): 11 points, corner at position 5."""
    return [(x, 0) for x in range(6)] + [(5, y) for y in range(1, 6)]


@pytest.fixture
def square_contour():
    """Border of the square [0,4]x[0,4], 16 points starting at the origin."""
    return ([(x, 0) for x in range(0, 4)]
            + [(4, y) for y in range(0, 4)]
            + [(x, 4) for x in range(4, 0, -1)]
            + [(0, y) for y in range(4, 0, -1)])


@pytest.fixture
def noisy_contour():
    """Return a factory building a seeded noisy digital line.

    Returns:
        callable(n, seed=0, slope=0.3, noise=2) -> list of (x, y) int tuples
    """
    def make(n, seed=0, slope=0.3, noise=2):
        rng = np.random.default_rng(seed)
        jitter = rng.integers(0, noise, size=n)
        return [(int(i), int(round(slope * i)) + int(j)) for i, j in enumerate(jitter)]
    return make


# -----------------------------------------------------------------------------
# Images
# -----------------------------------------------------------------------------

@pytest.fixture
def rect_image():
    """Return a 100x100 white BGR image with a black filled rectangle.

    The rectangle spans x in [20, 79] and y in [30, 69].
    """
    img = np.full((100, 100, 3), 255, dtype=np.uint8)
    cv2.rectangle(img, (20, 30), (79, 69), (0, 0, 0), thickness=-1)
    return img
