# navicam/input/events.py

from dataclasses import dataclass
from typing import Union

from navicam.input.buttons import Button


@dataclass(frozen=True)
class PressEvent:
    """A button went down."""

    button: Button


@dataclass(frozen=True)
class ReleaseEvent:
    """A button went up."""

    button: Button


@dataclass(frozen=True)
class MouseRelativeEvent:
    """Relative mouse motion since the previous event."""

    dx: float
    dy: float


@dataclass(frozen=True)
class MouseScrollEvent:
    """Scroll wheel / trackpad delta."""

    dx: float
    dy: float


@dataclass(frozen=True)
class UpdateEvent:
    """Periodic tick carrying elapsed seconds."""

    dt: float


InputEvent = Union[PressEvent, ReleaseEvent, MouseRelativeEvent, MouseScrollEvent, UpdateEvent]
