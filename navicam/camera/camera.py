# navicam/camera/camera.py

from dataclasses import dataclass
from typing import Sequence

import numpy as np
from navicam.utils.math import (
    DTYPE,
    EPSILON,
    as_vec3,
    col_mat4_mul,
    normalized_sub,
    quaternion_rotate_vector,
    vec3,
)


class DegenerateBasisError(ValueError):
    """The requested orientation does not define an orthonormal basis."""


def model_view_projection(model: np.ndarray, view: np.ndarray, projection: np.ndarray) -> np.ndarray:
    """Computes projection * view * model (column-major)."""
    return col_mat4_mul(col_mat4_mul(projection, view), model)


class Camera:
    """
    Camera pose: position plus an orthonormal right/up/forward basis.
    Controllers build a fresh one per query; it is a snapshot, not the source of truth.
    """

    def __init__(self, position: Sequence[float]):
        # Looking towards positive z
        self.position = as_vec3(position)
        self.right = vec3(1.0, 0.0, 0.0)
        self.up = vec3(0.0, 1.0, 0.0)
        self.forward = vec3(0.0, 0.0, 1.0)

    def orthogonal(self) -> np.ndarray:
        """
        View matrix for the camera, transforming world coordinates to camera space.
        Column-major, like every matrix in this package.
        """
        p, r, u, f = self.position, self.right, self.up, self.forward
        return np.array([
            [r[0], u[0], f[0], 0.0],
            [r[1], u[1], f[1], 0.0],
            [r[2], u[2], f[2], 0.0],
            [-np.dot(r, p), -np.dot(u, p), -np.dot(f, p), 1.0],
        ], dtype=DTYPE)

    def look_at(self, point: Sequence[float]):
        """
        Orient the camera towards a point.

        forward points from the point back to the camera and up is kept as is.
        Raises DegenerateBasisError, leaving the camera untouched, when the point
        coincides with the position or lies straight along the up vector.
        """
        point = as_vec3(point)
        if np.linalg.norm(self.position - point) <= EPSILON:
            raise DegenerateBasisError(f"Cannot look at {point}: it is the camera position")

        forward = normalized_sub(self.position, point)
        right = np.cross(self.up, forward)
        if np.linalg.norm(right) <= EPSILON:
            raise DegenerateBasisError(f"Cannot look at {point}: view direction is parallel to up {self.up}")

        self.forward = forward
        self.right = right

    def set_yaw_pitch(self, yaw: float, pitch: float):
        """Sets yaw and pitch angle of camera in radians."""
        y_s, y_c = np.sin(yaw), np.cos(yaw)
        p_s, p_c = np.sin(pitch), np.cos(pitch)
        self.forward = vec3(y_s * p_c, p_s, y_c * p_c)
        self.up = vec3(y_s * -p_s, p_c, y_c * -p_s)
        self._update_right()

    def set_rotation(self, rotation: np.ndarray):
        """Sets forward, up and right from a quaternion relative to positive z."""
        self.forward = quaternion_rotate_vector(rotation, vec3(0.0, 0.0, 1.0))
        self.up = quaternion_rotate_vector(rotation, vec3(0.0, 1.0, 0.0))
        self._update_right()

    def view_projection(self, perspective: 'CameraPerspective') -> np.ndarray:
        """projection * view for this pose."""
        return col_mat4_mul(perspective.projection(), self.orthogonal())

    def _update_right(self):
        self.right = np.cross(self.up, self.forward)


@dataclass(frozen=True)
class CameraPerspective:
    """Perspective settings. fov is in degrees."""

    fov: float = 90.0
    near_clip: float = 0.1
    far_clip: float = 1000.0
    aspect_ratio: float = 1.0

    def projection(self) -> np.ndarray:
        """
        Projection matrix for the perspective (column-major).
        near_clip == far_clip is not allowed.
        """
        f = 1.0 / np.tan(np.radians(self.fov) / 2.0)
        far, near = self.far_clip, self.near_clip

        proj = np.zeros((4, 4), dtype=DTYPE)
        proj[0, 0] = f / self.aspect_ratio
        proj[1, 1] = f
        proj[2, 2] = (far + near) / (near - far)
        proj[2, 3] = -1.0
        proj[3, 2] = (2.0 * far * near) / (near - far)

        return proj
