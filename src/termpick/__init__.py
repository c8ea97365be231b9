"""termpick: interactive terminal pickers for flat lists and trees."""

# Behaviors
from termpick.behavior import Behavior, BehaviorKind

# Configuration
from termpick.config import PickerConfig, load_config

# Engine
from termpick.engine import SelectionEngine

# Errors
from termpick.errors import InputRequiredError, PickerError, SelectionCancelledError

# Items
from termpick.items import (
    Displayable,
    FileSystemNode,
    TreeItem,
    TreeNode,
    TreeNodeMetadata,
    TreeRoot,
)

# Keybindings
from termpick.keybindings import (
    DEFAULT_PICKER_KEYBINDINGS,
    PickerAction,
    PickerKeybindingsManager,
    get_picker_keybindings,
    set_picker_keybindings,
)

# Keyboard input handling
from termpick.keys import Action, ActionKey, Direction, DirectionKey, Key, KeyId, parse_key

# Outcomes
from termpick.outcome import Continue, FinishMulti, FinishSingle, Outcome

# Facade
from termpick.picker import Picker

# Line prompts
from termpick.prompts import ConsoleTextInput, TextInput

# Rendering
from termpick.render import RendererKind

# Scrolling
from termpick.scroll import ScrollWindow, bounds, compute_window

# State
from termpick.state import (
    Option,
    PickerLayout,
    SelectionState,
    SingleColumnLayout,
    TwoColumnDynamicLayout,
    TwoColumnStaticLayout,
)

# Terminal
from termpick.terminal import ProcessTerminal, Terminal

# Tree navigation
from termpick.tree import Level, TreeNavigationState

# Text utilities
from termpick.text import truncate, visible_width, wrap_to_width

__all__ = [
    # Behaviors
    "Behavior",
    "BehaviorKind",
    # Configuration
    "PickerConfig",
    "load_config",
    # Engine
    "SelectionEngine",
    # Errors
    "InputRequiredError",
    "PickerError",
    "SelectionCancelledError",
    # Items
    "Displayable",
    "FileSystemNode",
    "TreeItem",
    "TreeNode",
    "TreeNodeMetadata",
    "TreeRoot",
    # Keybindings
    "DEFAULT_PICKER_KEYBINDINGS",
    "PickerAction",
    "PickerKeybindingsManager",
    "get_picker_keybindings",
    "set_picker_keybindings",
    # Keys
    "Action",
    "ActionKey",
    "Direction",
    "DirectionKey",
    "Key",
    "KeyId",
    "parse_key",
    # Outcomes
    "Continue",
    "FinishMulti",
    "FinishSingle",
    "Outcome",
    # Facade
    "Picker",
    # Line prompts
    "ConsoleTextInput",
    "TextInput",
    # Rendering
    "RendererKind",
    # Scrolling
    "ScrollWindow",
    "bounds",
    "compute_window",
    # State
    "Option",
    "PickerLayout",
    "SelectionState",
    "SingleColumnLayout",
    "TwoColumnDynamicLayout",
    "TwoColumnStaticLayout",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Tree navigation
    "Level",
    "TreeNavigationState",
    # Text utilities
    "truncate",
    "visible_width",
    "wrap_to_width",
]
