"""Exceptions raised by termpick."""

from __future__ import annotations


class PickerError(Exception):
    """Base class for picker errors."""


class SelectionCancelledError(PickerError):
    """The user quit a picker whose answer was required."""

    def __init__(self, prompt: str = "") -> None:
        self.prompt = prompt
        message = "Selection cancelled"
        if prompt:
            message += f": {prompt}"
        super().__init__(message)


class InputRequiredError(PickerError):
    """A required text answer or permission was not given."""

    def __init__(self, prompt: str = "") -> None:
        self.prompt = prompt
        message = "Input required"
        if prompt:
            message += f": {prompt}"
        super().__init__(message)
