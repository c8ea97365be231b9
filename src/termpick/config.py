"""Picker configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping

from termpick.keybindings import PickerKeybindingsConfig
from termpick.style import DIVIDER_STYLES

_TRUTHY = ("1", "true", "yes", "on")


@dataclass
class PickerConfig:
    """Presentation and key settings shared by every picker run."""

    divider_style: str = "single"
    show_prompt_text: bool = True
    show_selected_item_text: bool = True
    new_screen: bool = True
    echo_results: bool = True
    keybindings: PickerKeybindingsConfig = field(default_factory=dict)


def load_config(environ: Mapping[str, str] | None = None) -> PickerConfig:
    """Build a :class:`PickerConfig` from ``TERMPICK_*`` environment variables.

    Unknown divider styles are ignored and the default is kept.
    """
    env = os.environ if environ is None else environ
    config = PickerConfig()

    divider = env.get("TERMPICK_DIVIDER", "").strip().lower()
    if divider in DIVIDER_STYLES:
        config.divider_style = divider

    if env.get("TERMPICK_NO_ECHO", "").strip().lower() in _TRUTHY:
        config.echo_results = False

    quit_keys = [k.strip() for k in env.get("TERMPICK_QUIT_KEYS", "").split(",") if k.strip()]
    if quit_keys:
        config.keybindings["quit"] = quit_keys

    return config
