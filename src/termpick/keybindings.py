"""Picker keybindings manager."""

from __future__ import annotations

from typing import Literal

from termpick.keys import ActionKey, DirectionKey, Key, KeyEvent, KeyId, matches_key, parse_key

PickerAction = Literal[
    # Movement
    "moveUp",
    "moveDown",
    "moveLeft",
    "moveRight",
    # Actions
    "confirm",
    "toggle",
    "quit",
    "back",
]

PickerKeybindingsConfig = dict[PickerAction, KeyId | list[KeyId]]

DEFAULT_PICKER_KEYBINDINGS: dict[PickerAction, KeyId | list[KeyId]] = {
    # Movement
    "moveUp": Key.up,
    "moveDown": Key.down,
    "moveLeft": Key.left,
    "moveRight": Key.right,
    # Actions
    "confirm": Key.enter,
    "toggle": Key.space,
    "quit": ["q", "Q"],
    "back": Key.backspace,
}

# Checked in this order, so a key bound to two actions resolves to the first.
_EVENTS: tuple[tuple[PickerAction, KeyEvent], ...] = (
    ("moveUp", DirectionKey("up")),
    ("moveDown", DirectionKey("down")),
    ("moveLeft", DirectionKey("left")),
    ("moveRight", DirectionKey("right")),
    ("confirm", ActionKey("enter")),
    ("toggle", ActionKey("space")),
    ("quit", ActionKey("quit")),
    ("back", ActionKey("backspace")),
)


class PickerKeybindingsManager:
    """Maps raw terminal input onto directional and action key events."""

    def __init__(self, config: PickerKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PickerAction, list[KeyId]] = {}
        self._key_to_event: dict[KeyId, KeyEvent] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: PickerKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        self._key_to_event.clear()

        # Start with defaults
        for action, keys in DEFAULT_PICKER_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        for action, event in _EVENTS:
            for key in self._action_to_keys.get(action, []):
                self._key_to_event.setdefault(key, event)

    def matches(self, data: str, action: PickerAction) -> bool:
        """Check if input matches a specific action."""
        return any(matches_key(data, key) for key in self._action_to_keys.get(action, []))

    def decode(self, data: str) -> KeyEvent | None:
        """Decode raw input into a key event, or ``None`` for unbound keys."""
        parsed = parse_key(data)
        if parsed is None:
            return None
        return self._key_to_event.get(parsed)

    def get_keys(self, action: PickerAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: PickerKeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_picker_keybindings: PickerKeybindingsManager | None = None


def get_picker_keybindings() -> PickerKeybindingsManager:
    global _global_picker_keybindings
    if _global_picker_keybindings is None:
        _global_picker_keybindings = PickerKeybindingsManager()
    return _global_picker_keybindings


def set_picker_keybindings(manager: PickerKeybindingsManager) -> None:
    global _global_picker_keybindings
    _global_picker_keybindings = manager
