"""
Canonical vector utilities for skeleton construction.

Directions are plain numpy arrays of shape (3,). +Y is up.
"""

import numpy as np

EPSILON = 1e-12

UP = np.array([0.0, 1.0, 0.0])


def normalize(v: np.ndarray) -> np.ndarray:
    """Return v / |v|, or a zero vector when |v| is (numerically) zero."""
    v = np.asarray(v, dtype=np.float64)
    n = np.linalg.norm(v)
    if n < EPSILON:
        return np.zeros(3)
    return v / n


def rotate_around(v: np.ndarray, axis: np.ndarray, angle: float) -> np.ndarray:
    """
    Rotate v about axis by angle (radians) using Rodrigues' formula.

    v_rot = v cos(a) + (k x v) sin(a) + k (k . v)(1 - cos(a))
    """
    k = normalize(axis)
    c = np.cos(angle)
    s = np.sin(angle)
    return v * c + np.cross(k, v) * s + k * (np.dot(k, v) * (1.0 - c))


def perpendicular(direction: np.ndarray) -> np.ndarray:
    """
    Unit vector perpendicular to direction.

    Crosses with +Y unless the direction is nearly vertical, in which case +X
    is used instead.
    """
    if abs(direction[1]) < 0.9:
        arbitrary = UP
    else:
        arbitrary = np.array([1.0, 0.0, 0.0])
    return normalize(np.cross(direction, arbitrary))


def spherical_direction(polar: float, azimuth: float) -> np.ndarray:
    """Unit vector at `polar` radians from +Y, rotated `azimuth` radians about +Y."""
    return normalize(np.array([
        np.sin(polar) * np.cos(azimuth),
        np.cos(polar),
        np.sin(polar) * np.sin(azimuth),
    ]))


def horizontal_distance(points: np.ndarray, center) -> np.ndarray:
    """Distance in the XZ plane from each point to center."""
    points = np.asarray(points, dtype=np.float64)
    dx = points[..., 0] - center[0]
    dz = points[..., 2] - center[2]
    return np.sqrt(dx * dx + dz * dz)


__all__ = [
    "EPSILON",
    "UP",
    "normalize",
    "rotate_around",
    "perpendicular",
    "spherical_direction",
    "horizontal_distance",
]
