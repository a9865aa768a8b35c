"""Argument checks run before any message is sent."""

from typing import Any


class ArgumentError(Exception):
    """Message argument has the wrong type."""

    def __init__(self, message: str) -> None:
        """Initialize with a human-readable message."""
        super().__init__(message)
        self.code = "invalid_argument"


def validate_string(value: Any, fn_name: str, param_name: str) -> None:  # noqa: ANN401
    """Raise unless ``value`` is a string."""
    if not isinstance(value, str):
        raise ArgumentError(f"{fn_name}() {param_name} must be a string, got {type(value).__name__}")


def validate_number(value: Any, fn_name: str, param_name: str) -> None:  # noqa: ANN401
    """Raise unless ``value`` is an int or float (bool is rejected)."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise ArgumentError(f"{fn_name}() {param_name} must be a number, got {type(value).__name__}")


def validate_boolean(value: Any, fn_name: str, param_name: str) -> None:  # noqa: ANN401
    """Raise unless ``value`` is a bool."""
    if not isinstance(value, bool):
        raise ArgumentError(f"{fn_name}() {param_name} must be a boolean, got {type(value).__name__}")
