# navicam/camera/first_person.py

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Set

import numpy as np
from navicam.camera.camera import Camera
from navicam.camera.camera_controller import CameraController
from navicam.core.config import Config
from navicam.input.action_map import ActionMap
from navicam.input.buttons import Button
from navicam.input.events import (
    InputEvent,
    MouseRelativeEvent,
    PressEvent,
    ReleaseEvent,
    UpdateEvent,
)
from navicam.utils.math import as_vec3, clamp, sign, vec3
from navicam.core.logging import get_logger

logger = get_logger()

# Mouse units to radians: 360 units of motion turn the camera by 45 degrees.
DEFAULT_MOUSE_SENSITIVITY = (1.0 / 360.0) * (math.pi / 4.0)

FASTER_VELOCITY = 2.0

_SQRT2 = math.sqrt(2.0)


class FirstPersonAction(Enum):
    MOVE_FORWARD = 'move_forward'
    MOVE_BACKWARD = 'move_backward'
    STRAFE_LEFT = 'strafe_left'
    STRAFE_RIGHT = 'strafe_right'
    FLY_UP = 'fly_up'
    FLY_DOWN = 'fly_down'
    MOVE_FASTER = 'move_faster'


# action -> (direction axis, contribution, opposite action)
# Local axes: x strafes right, y flies up, z moves backward.
_MOVEMENT = {
    FirstPersonAction.MOVE_FORWARD: (2, -1.0, FirstPersonAction.MOVE_BACKWARD),
    FirstPersonAction.MOVE_BACKWARD: (2, 1.0, FirstPersonAction.MOVE_FORWARD),
    FirstPersonAction.STRAFE_LEFT: (0, -1.0, FirstPersonAction.STRAFE_RIGHT),
    FirstPersonAction.STRAFE_RIGHT: (0, 1.0, FirstPersonAction.STRAFE_LEFT),
    FirstPersonAction.FLY_UP: (1, 1.0, FirstPersonAction.FLY_DOWN),
    FirstPersonAction.FLY_DOWN: (1, -1.0, FirstPersonAction.FLY_UP),
}


@dataclass(frozen=True)
class FirstPersonSettings:
    """
    First person camera settings.
    Speeds are measured in units per second.
    """

    move_forward_button: Button
    move_backward_button: Button
    strafe_left_button: Button
    strafe_right_button: Button
    fly_up_button: Button
    fly_down_button: Button
    move_faster_button: Button
    speed_horizontal: float = 1.0
    speed_vertical: float = 1.0
    mouse_sensitivity: float = DEFAULT_MOUSE_SENSITIVITY

    @classmethod
    def keyboard_wasd(cls) -> 'FirstPersonSettings':
        """WASD movement, space/left shift to fly, left ctrl to go faster."""
        return cls(
            move_forward_button=Button.key('w'),
            move_backward_button=Button.key('s'),
            strafe_left_button=Button.key('a'),
            strafe_right_button=Button.key('d'),
            fly_up_button=Button.key('space'),
            fly_down_button=Button.key('lshift'),
            move_faster_button=Button.key('lctrl'),
        )

    @classmethod
    def keyboard_esdf(cls) -> 'FirstPersonSettings':
        """ESDF movement, space/z to fly, left shift to go faster."""
        return cls(
            move_forward_button=Button.key('e'),
            move_backward_button=Button.key('d'),
            strafe_left_button=Button.key('s'),
            strafe_right_button=Button.key('f'),
            fly_up_button=Button.key('space'),
            fly_down_button=Button.key('z'),
            move_faster_button=Button.key('lshift'),
        )

    @classmethod
    def from_config(cls, config: Config) -> 'FirstPersonSettings':
        """
        Build settings from the 'first_person' config section.
        A layout preset is picked first, then individual '<action>_button'
        entries override it.
        """
        layout = config.get('first_person.layout', 'wasd')
        if layout == 'wasd':
            settings = cls.keyboard_wasd()
        elif layout == 'esdf':
            settings = cls.keyboard_esdf()
        else:
            raise ValueError(f"Unknown first person layout {layout!r}")

        overrides = {}
        for action in FirstPersonAction:
            name = f"{action.value}_button"
            value = config.get(f"first_person.{name}")
            if value is not None:
                overrides[name] = Button.parse(value)

        for name in ('speed_horizontal', 'speed_vertical', 'mouse_sensitivity'):
            value = config.get(f"first_person.{name}")
            if value is not None:
                overrides[name] = float(value)

        return dataclasses.replace(settings, **overrides)

    def action_map(self) -> ActionMap:
        return ActionMap(
            (action, getattr(self, f"{action.value}_button")) for action in FirstPersonAction
        )


def _normalize_diagonal(direction: Sequence[float]) -> np.ndarray:
    """Snap horizontal components to signs and keep diagonal motion at unit speed."""
    x, y, z = sign(direction[0]), direction[1], sign(direction[2])
    if x != 0.0 and z != 0.0:
        x, z = x / _SQRT2, z / _SQRT2
    return vec3(x, y, z)


class FirstPerson(CameraController):
    """
    Flying first person camera.
    Mouse motion turns it, movement buttons set a direction that is integrated
    into the position on update.
    """

    def __init__(self, position: Sequence[float], settings: FirstPersonSettings):
        self.settings = settings
        self.yaw = 0.0
        self.pitch = 0.0
        self.direction = vec3()
        self.position = as_vec3(position)
        self.velocity = 1.0

        # Movement actions currently held
        self.keys: Set[FirstPersonAction] = set()
        self._actions = settings.action_map()

        super().__init__()

    def camera(self, dt: float) -> Camera:
        """Camera moved along the current direction for dt seconds."""
        dh = dt * self.velocity * self.settings.speed_horizontal
        dx, dy, dz = self.direction
        s, c = np.sin(self.yaw), np.cos(self.yaw)

        camera = Camera(self.position + vec3(
            (c * dx + s * dz) * dh,
            dy * dt * self.settings.speed_vertical,
            (c * dz - s * dx) * dh,
        ))
        camera.set_yaw_pitch(self.yaw, self.pitch)
        return camera

    def update(self, dt: float):
        """Updates the position."""
        self.position = self.camera(dt).position

    def event(self, e: InputEvent):
        """Handles an input event and updates the camera state."""
        if isinstance(e, MouseRelativeEvent):
            if self._accepts(e, e.dx, e.dy):
                self._look(e.dx, e.dy)
        elif isinstance(e, PressEvent):
            self._press(e.button)
        elif isinstance(e, ReleaseEvent):
            self._release(e.button)
        elif isinstance(e, UpdateEvent):
            if self._accepts(e, e.dt):
                self.update(e.dt)

    def _look(self, dx: float, dy: float):
        sensitivity = self.settings.mouse_sensitivity
        self.yaw = (self.yaw - dx * sensitivity) % (2.0 * math.pi)
        self.pitch = clamp(self.pitch + dy * sensitivity, -math.pi / 2.0, math.pi / 2.0)

    def _press(self, button: Button):
        action = self._actions.action_for(button)
        if action is None:
            return

        if action is FirstPersonAction.MOVE_FASTER:
            self.velocity = FASTER_VELOCITY
            return

        axis, value, _ = _MOVEMENT[action]
        direction = list(self.direction)
        direction[axis] = value
        self.direction = _normalize_diagonal(direction)
        self.keys.add(action)
        logger.debug(f"FirstPerson pressed {action.value}, direction {self.direction}")

    def _release(self, button: Button):
        action = self._actions.action_for(button)
        if action is None:
            return

        if action is FirstPersonAction.MOVE_FASTER:
            self.velocity = 1.0
            return

        axis, value, opposite = _MOVEMENT[action]
        self.keys.discard(action)
        direction = list(self.direction)
        # The opposite key takes over if it is still held
        direction[axis] = -value if opposite in self.keys else 0.0
        self.direction = _normalize_diagonal(direction)
        logger.debug(f"FirstPerson released {action.value}, direction {self.direction}")
