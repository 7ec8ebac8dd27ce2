"""
3D simplex noise.

Stefan Gustavson's simplex noise with the classic 12-gradient table and the
reference 256-entry permutation. The tables are built once at import and
never mutated, so results are identical across calls and processes.

`simplex3` is vectorized: pass numpy arrays of equal shape (or scalars) and
get an array (or float) back, roughly in [-1, 1].
"""

import numpy as np

GRAD3 = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
], dtype=np.float64)

_P = np.array([
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
], dtype=np.int64)

PERM = np.concatenate([_P, _P])
PERM_MOD12 = PERM % 12

for _table in (GRAD3, PERM, PERM_MOD12):
    _table.setflags(write=False)

F3 = 1.0 / 3.0
G3 = 1.0 / 6.0


def _corner(x, y, z, gi):
    t = 0.6 - x * x - y * y - z * z
    g = GRAD3[gi]
    dot = g[..., 0] * x + g[..., 1] * y + g[..., 2] * z
    t2 = t * t
    return np.where(t >= 0, t2 * t2 * dot, 0.0)


def simplex3(x, y, z):
    """
    Evaluate 3D simplex noise.

    Parameters
    ----------
    x, y, z : float or np.ndarray
        Sample coordinates (broadcast together)

    Returns
    -------
    float or np.ndarray
        Noise values scaled to approximately [-1, 1]
    """
    scalar = np.ndim(x) == 0 and np.ndim(y) == 0 and np.ndim(z) == 0
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )

    s = (x + y + z) * F3
    i = np.floor(x + s).astype(np.int64)
    j = np.floor(y + s).astype(np.int64)
    k = np.floor(z + s).astype(np.int64)
    t = (i + j + k) * G3
    x0 = x - (i - t)
    y0 = y - (j - t)
    z0 = z - (k - t)

    # Which of the six tetrahedra of the skewed cube holds the point
    xy = x0 >= y0
    yz = y0 >= z0
    xz = x0 >= z0
    c1 = xy & yz
    c2 = xy & ~yz & xz
    c3 = xy & ~yz & ~xz
    c4 = ~xy & ~yz
    c5 = ~xy & yz & ~xz
    c6 = ~xy & yz & xz

    i1 = (c1 | c2).astype(np.int64)
    j1 = (c5 | c6).astype(np.int64)
    k1 = (c3 | c4).astype(np.int64)
    i2 = (c1 | c2 | c3 | c6).astype(np.int64)
    j2 = (c1 | c4 | c5 | c6).astype(np.int64)
    k2 = (c2 | c3 | c4 | c5).astype(np.int64)

    x1 = x0 - i1 + G3
    y1 = y0 - j1 + G3
    z1 = z0 - k1 + G3
    x2 = x0 - i2 + 2.0 * G3
    y2 = y0 - j2 + 2.0 * G3
    z2 = z0 - k2 + 2.0 * G3
    x3 = x0 - 1.0 + 3.0 * G3
    y3 = y0 - 1.0 + 3.0 * G3
    z3 = z0 - 1.0 + 3.0 * G3

    ii = i & 255
    jj = j & 255
    kk = k & 255

    gi0 = PERM_MOD12[ii + PERM[jj + PERM[kk]]]
    gi1 = PERM_MOD12[ii + i1 + PERM[jj + j1 + PERM[kk + k1]]]
    gi2 = PERM_MOD12[ii + i2 + PERM[jj + j2 + PERM[kk + k2]]]
    gi3 = PERM_MOD12[ii + 1 + PERM[jj + 1 + PERM[kk + 1]]]

    n = (
        _corner(x0, y0, z0, gi0)
        + _corner(x1, y1, z1, gi1)
        + _corner(x2, y2, z2, gi2)
        + _corner(x3, y3, z3, gi3)
    )
    result = 32.0 * n
    if scalar:
        return float(result)
    return result


OCTAVE_MULTIPLIERS = (1.0, 2.0, 4.0)
OCTAVE_WEIGHTS = (0.4, 0.35, 0.25)
OCTAVE_OFFSETS = (
    (0.0, 0.0, 0.0),
    (31.7, 47.3, 12.9),
    (73.1, 19.4, 57.6),
)


def fractal_noise(points: np.ndarray, base_frequency: float) -> np.ndarray:
    """
    Three-octave weighted sum of simplex noise at (N, 3) points.

    Each octave samples at `points * base_frequency * multiplier + offset`;
    the fixed offsets decorrelate the octaves.
    """
    points = np.asarray(points, dtype=np.float64)
    total = np.zeros(len(points))
    for mult, weight, offset in zip(OCTAVE_MULTIPLIERS, OCTAVE_WEIGHTS, OCTAVE_OFFSETS):
        p = points * (base_frequency * mult) + np.asarray(offset)
        total += weight * simplex3(p[:, 0], p[:, 1], p[:, 2])
    return total


__all__ = ["simplex3", "fractal_noise", "GRAD3", "PERM", "PERM_MOD12"]
