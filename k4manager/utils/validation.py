"""
Data validation utilities for K4 patch data.

Parsing never validates: it trusts the wire encoding's bit widths. These
helpers are used when encoding and when a caller asks a model to check
itself before sending it to the instrument.
"""

from typing import List, Tuple


class ValidationError(Exception):
    """Raised when patch data validation fails."""

    pass


def validate_wire_byte(value: int, name: str = "value") -> int:
    """
    Validate that a value fits in a 7-bit SysEx data byte.

    Args:
        value: The value to validate
        name: Name of the value for error messages

    Returns:
        The value, unchanged

    Raises:
        ValidationError: If value is out of range
    """
    if not 0 <= value <= 0x7F:
        raise ValidationError(f"{name} must encode to 0-127, got {value}")
    return value


def validate_range(value: int, low: int, high: int, name: str = "value") -> None:
    """
    Validate that a value is inside a closed range.

    Raises:
        ValidationError: If value is out of range
    """
    if not low <= value <= high:
        raise ValidationError(f"{name} must be {low}-{high}, got {value}")


def validate_channel(channel: int) -> None:
    """
    Validate MIDI channel number (1-16).

    Raises:
        ValidationError: If channel is out of range
    """
    if not 1 <= channel <= 16:
        raise ValidationError(f"MIDI channel must be 1-16, got {channel}")


def collect_errors(checks: List[Tuple[str, int, int, int]]) -> List[str]:
    """
    Run a list of range checks and collect the failures.

    Args:
        checks: Tuples of (name, value, low, high)

    Returns:
        Human-readable messages for every failed check
    """
    errors = []
    for name, value, low, high in checks:
        try:
            validate_range(value, low, high, name)
        except ValidationError as e:
            errors.append(str(e))
    return errors
