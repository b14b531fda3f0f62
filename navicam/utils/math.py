# navicam/utils/math.py

import numpy as np
from typing import Sequence

# Vectors are float64 arrays of shape (3,), quaternions (4,) ordered [x, y, z, w],
# 4x4 matrices are stored column-major: m[column][row].
DTYPE = np.float64

# Lengths below this are treated as zero.
EPSILON = 1e-9


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    """Build a 3-component vector."""
    return np.array([x, y, z], dtype=DTYPE)


def as_vec3(value: Sequence[float]) -> np.ndarray:
    """Copy any 3-sequence into a fresh vector."""
    arr = np.array(value, dtype=DTYPE)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def normalize(v: np.ndarray) -> np.ndarray:
    """Return v scaled to unit length (zero vector stays zero)."""
    length = np.linalg.norm(v)
    if length > EPSILON:
        return v / length
    return np.zeros(3, dtype=DTYPE)


def normalized_sub(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Normalized direction pointing from b to a."""
    return normalize(np.asarray(a, dtype=DTYPE) - np.asarray(b, dtype=DTYPE))


def sign(x: float) -> float:
    """Sign of x, with sign(0) == 0."""
    if x == 0.0:
        return 0.0
    return 1.0 if x > 0.0 else -1.0


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value between min and max."""
    return max(min_val, min(max_val, value))


def quaternion_identity() -> np.ndarray:
    return np.array([0.0, 0.0, 0.0, 1.0], dtype=DTYPE)


def quaternion_from_axis_angle(axis: Sequence[float], angle: float) -> np.ndarray:
    """Rotation of `angle` radians about a unit `axis`."""
    half = angle * 0.5
    s = np.sin(half)
    return np.array([axis[0] * s, axis[1] * s, axis[2] * s, np.cos(half)], dtype=DTYPE)


def quaternion_multiply(q1: np.ndarray, q2: np.ndarray) -> np.ndarray:
    """Multiply two quaternions (q2 is applied first)."""
    x1, y1, z1, w1 = q1[0], q1[1], q1[2], q1[3]
    x2, y2, z2, w2 = q2[0], q2[1], q2[2], q2[3]

    w = w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2
    x = w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2
    y = w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2
    z = w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2

    return np.array([x, y, z, w], dtype=DTYPE)


def quaternion_rotate_vector(quat: np.ndarray, v: Sequence[float]) -> np.ndarray:
    """Rotate vector v by a unit quaternion."""
    u = np.asarray(quat[:3], dtype=DTYPE)
    w = quat[3]
    v = np.asarray(v, dtype=DTYPE)
    t = 2.0 * np.cross(u, v)
    return v + w * t + np.cross(u, t)


def col_mat4_mul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Product a * b of two column-major 4x4 matrices.
    With m[column][row] storage this is b @ a on the raw arrays.
    """
    return np.asarray(b, dtype=DTYPE) @ np.asarray(a, dtype=DTYPE)


def col_mat4_transform(m: np.ndarray, v: Sequence[float]) -> np.ndarray:
    """Apply a column-major 4x4 matrix to a homogeneous 4-vector."""
    return np.asarray(v, dtype=DTYPE) @ np.asarray(m, dtype=DTYPE)
