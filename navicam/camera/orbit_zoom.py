# navicam/camera/orbit_zoom.py

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Set

from navicam.camera.camera import Camera
from navicam.camera.camera_controller import CameraController
from navicam.core.config import Config
from navicam.input.action_map import ActionMap
from navicam.input.buttons import Button
from navicam.input.events import (
    InputEvent,
    MouseRelativeEvent,
    MouseScrollEvent,
    PressEvent,
    ReleaseEvent,
)
from navicam.utils.math import (
    as_vec3,
    clamp,
    quaternion_from_axis_angle,
    quaternion_identity,
    quaternion_multiply,
    quaternion_rotate_vector,
    vec3,
)
from navicam.core.logging import get_logger

logger = get_logger()

DEFAULT_DISTANCE = 10.0


class OrbitZoomAction(Enum):
    ORBIT = 'orbit'
    PAN = 'pan'
    ZOOM = 'zoom'


@dataclass(frozen=True)
class OrbitZoomCameraSettings:
    """
    Orbit zoom camera settings.
    Speeds are arbitrary units applied to the raw mouse/scroll deltas.
    """

    orbit_button: Button
    zoom_button: Button
    pan_button: Button
    orbit_speed: float = 0.05
    pan_speed: float = 0.1
    zoom_speed: float = 0.1
    min_distance: float = 0.0
    pitch_limit: float = math.pi / 2.0

    @classmethod
    def default(cls) -> 'OrbitZoomCameraSettings':
        """
        Clicking and dragging or two-finger scrolling orbits the camera,
        with left shift as pan modifier and left ctrl as zoom modifier.
        """
        return cls(
            orbit_button=Button.mouse('left'),
            zoom_button=Button.key('lctrl'),
            pan_button=Button.key('lshift'),
        )

    @classmethod
    def from_config(cls, config: Config) -> 'OrbitZoomCameraSettings':
        """Build settings from the 'orbit_zoom' config section."""
        overrides = {}
        for action in OrbitZoomAction:
            name = f"{action.value}_button"
            value = config.get(f"orbit_zoom.{name}")
            if value is not None:
                overrides[name] = Button.parse(value)

        for name in ('orbit_speed', 'pan_speed', 'zoom_speed', 'min_distance', 'pitch_limit'):
            value = config.get(f"orbit_zoom.{name}")
            if value is not None:
                overrides[name] = float(value)

        return dataclasses.replace(cls.default(), **overrides)

    def action_map(self) -> ActionMap:
        return ActionMap(
            (action, getattr(self, f"{action.value}_button")) for action in OrbitZoomAction
        )


class OrbitZoomCamera(CameraController):
    """
    A 3dsMax / Blender-style camera that orbits around a target point.
    """

    def __init__(self, target: Sequence[float], settings: OrbitZoomCameraSettings,
                 distance: float = DEFAULT_DISTANCE):
        # Origin of camera rotation
        self.target = as_vec3(target)
        self.rotation = quaternion_identity()
        self.pitch = 0.0
        self.yaw = 0.0
        self.distance = max(distance, settings.min_distance)
        self.settings = settings

        # Modifier actions currently held
        self.keys: Set[OrbitZoomAction] = set()
        self._actions = settings.action_map()

        super().__init__()

    @classmethod
    def from_config(cls, target: Sequence[float], config: Config) -> 'OrbitZoomCamera':
        settings = OrbitZoomCameraSettings.from_config(config)
        return cls(target, settings, float(config.get('orbit_zoom.distance', DEFAULT_DISTANCE)))

    def camera(self, dt: float) -> Camera:
        """Camera for the current orbit configuration. dt is unused."""
        target_to_camera = quaternion_rotate_vector(self.rotation, vec3(0.0, 0.0, self.distance))
        camera = Camera(self.target + target_to_camera)
        camera.set_rotation(self.rotation)
        return camera

    def control_camera(self, dx: float, dy: float):
        """
        Orbit the camera using the given horizontal and vertical deltas,
        or zoom or pan if the matching modifier is held.
        Pan wins over zoom, zoom wins over orbit.
        """
        if OrbitZoomAction.PAN in self.keys:
            self._pan(dx * self.settings.pan_speed, dy * self.settings.pan_speed)
        elif OrbitZoomAction.ZOOM in self.keys:
            self._zoom(dy * self.settings.zoom_speed)
        else:
            self._orbit(dx * self.settings.orbit_speed, dy * self.settings.orbit_speed)

    def _pan(self, dx: float, dy: float):
        # Move the target in the plane facing the camera
        right = quaternion_rotate_vector(self.rotation, vec3(1.0, 0.0, 0.0))
        up = quaternion_rotate_vector(self.rotation, vec3(0.0, 1.0, 0.0))
        self.target = self.target + up * dy + right * dx

    def _zoom(self, delta: float):
        self.distance = max(self.settings.min_distance, self.distance + delta)

    def _orbit(self, dyaw: float, dpitch: float):
        limit = self.settings.pitch_limit
        self.yaw = self.yaw + dyaw
        self.pitch = clamp(self.pitch + dpitch, -limit, limit)
        # Rebuilt from the angles every time so rounding never accumulates
        self.rotation = quaternion_multiply(
            quaternion_from_axis_angle(vec3(0.0, 1.0, 0.0), self.yaw),
            quaternion_from_axis_angle(vec3(1.0, 0.0, 0.0), self.pitch),
        )

    def event(self, e: InputEvent):
        """Respond to scroll, mouse motion and modifier press/release events."""
        if isinstance(e, MouseScrollEvent):
            if self._accepts(e, e.dx, e.dy):
                self.control_camera(e.dx, e.dy)
        elif isinstance(e, MouseRelativeEvent):
            if OrbitZoomAction.ORBIT in self.keys and self._accepts(e, e.dx, e.dy):
                self.control_camera(-e.dx, e.dy)
        elif isinstance(e, PressEvent):
            action = self._actions.action_for(e.button)
            if action is not None:
                self.keys.add(action)
                logger.debug(f"OrbitZoomCamera modifier {action.value} held")
        elif isinstance(e, ReleaseEvent):
            action = self._actions.action_for(e.button)
            if action is not None:
                self.keys.discard(action)
                logger.debug(f"OrbitZoomCamera modifier {action.value} released")
