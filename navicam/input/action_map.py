# navicam/input/action_map.py

from typing import Dict, Generic, Iterable, Optional, Tuple, TypeVar

from navicam.input.buttons import Button

A = TypeVar('A')


class ActionMap(Generic[A]):
    """
    Maps raw buttons to logical actions.
    Built once from a controller's settings and queried on every press/release.
    """

    def __init__(self, bindings: Iterable[Tuple[A, Button]] = ()):
        self._by_button: Dict[Button, A] = {}
        for action, button in bindings:
            self.bind(action, button)

    def bind(self, action: A, button: Button):
        """Bind a button to an action. A button can drive only one action."""
        current = self._by_button.get(button)
        if current is not None and current != action:
            raise ValueError(f"Button {button} is already bound to {current}")
        self._by_button[button] = action

    def action_for(self, button: Button) -> Optional[A]:
        """Action bound to button, or None."""
        return self._by_button.get(button)

    def __contains__(self, button: Button) -> bool:
        return button in self._by_button

    def __len__(self) -> int:
        return len(self._by_button)
