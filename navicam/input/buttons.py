# navicam/input/buttons.py

from dataclasses import dataclass
from enum import Enum


class InputDevice(Enum):
    KEYBOARD = 1
    MOUSE = 2


_PREFIXES = {
    'key': InputDevice.KEYBOARD,
    'mouse': InputDevice.MOUSE,
}


@dataclass(frozen=True)
class Button:
    """
    A keyboard key or mouse button, compared by value.
    Codes are lower-case names such as 'w', 'space', 'lshift' or 'left'.
    """

    device: InputDevice
    code: str

    @classmethod
    def key(cls, code: str) -> 'Button':
        return cls(InputDevice.KEYBOARD, code.lower())

    @classmethod
    def mouse(cls, code: str) -> 'Button':
        return cls(InputDevice.MOUSE, code.lower())

    @classmethod
    def parse(cls, text: str) -> 'Button':
        """
        Parse the 'device:code' form used in config files.
        Example: Button.parse('key:lshift')
        """
        prefix, sep, code = text.strip().partition(':')
        device = _PREFIXES.get(prefix.lower())
        if not sep or device is None:
            raise ValueError(f"Unknown button device in {text!r}, expected 'key:' or 'mouse:'")
        if not code:
            raise ValueError(f"Missing button code in {text!r}")
        return cls(device, code.lower())

    def __str__(self) -> str:
        prefix = 'key' if self.device is InputDevice.KEYBOARD else 'mouse'
        return f"{prefix}:{self.code}"
