# navicam/camera/camera_controller.py

import math
from abc import ABC, abstractmethod
from navicam.camera.camera import Camera
from navicam.input.events import InputEvent
from navicam.core.logging import get_logger

logger = get_logger()

class CameraController(ABC):
    """
    Base class for input-driven camera controllers.
    Controllers own the authoritative state, feed them events in the order they
    happened and ask for a Camera snapshot at render time.
    """

    def __init__(self):
        logger.debug(f"{self.__class__.__name__} initialized")

    @abstractmethod
    def event(self, e: InputEvent):
        """Respond to an input event. Unknown events are ignored."""
        pass

    @abstractmethod
    def camera(self, dt: float) -> Camera:
        """Camera for the current state, without mutating it."""
        pass

    def _accepts(self, e: InputEvent, *values: float) -> bool:
        """Drop events carrying NaN or infinite values."""
        if all(math.isfinite(v) for v in values):
            return True
        logger.warning(f"{self.__class__.__name__} ignored non-finite event {e}")
        return False
