"""
Display formatting utilities for CLI output.

Provides bar graphics and value formatting for K4 parameters.
"""


def value_bar(
    value: int,
    max_value: int = 100,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
) -> str:
    """
    Create a text-based bar graphic for an unsigned level.

    Args:
        value: Current value
        max_value: Maximum value (default 100, the K4 level range)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value

    Returns:
        Formatted string like " 75 [███████░░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)

    if show_value:
        return f"{value:3d} [{bar}]"
    return f"[{bar}]"


def depth_bar(value: int, limit: int = 50, width: int = 11) -> str:
    """
    Create a centered bar graphic for a signed depth.

    Returns:
        Formatted string like "-20 [──◀◀●─────]"
    """
    center = width // 2
    bar = ["─"] * width
    bar[center] = "●"

    if limit > 0 and value != 0:
        span = min(abs(value), limit) / limit
        steps = max(1, int(span * center))
        for i in range(1, steps + 1):
            if value < 0:
                bar[center - i] = "◀"
            else:
                bar[center + i] = "▶"

    return f"{format_signed(value):>3} [{''.join(bar)}]"


def format_signed(value: int) -> str:
    """Format a signed value with an explicit plus sign."""
    return f"+{value}" if value > 0 else str(value)


def pan_to_string(pan: int) -> str:
    """Convert a K4 pan value (-7 to +7) to a readable string."""
    if pan == 0:
        return "C"
    if pan < 0:
        return f"L{-pan}"
    return f"R{pan}"


def on_off(flag: bool) -> str:
    return "[green]On[/green]" if flag else "[dim]Off[/dim]"
