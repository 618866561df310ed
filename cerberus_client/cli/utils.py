"""
Utilities for the Cerberus CLI.
"""
import sys

COLORS = {
    "default": "\033[0m",
    "green": "\033[92m",
    "red": "\033[91m",
    "yellow": "\033[93m",
    "blue": "\033[94m",
}


def print_colored(text: str, color: str = "default", stream=None) -> None:
    """
    Prints colored text to stderr, or plain text if it is not a terminal.

    Status messages go to stderr so that stdout only carries the
    command's output (a token, a JSON document).

    Args:
        text: Text to print
        color: Color name (default, green, red, yellow, blue)
        stream: Output stream (defaults to sys.stderr)
    """
    stream = stream or sys.stderr
    if hasattr(stream, "isatty") and stream.isatty():
        start_color = COLORS.get(color, COLORS["default"])
        text = f"{start_color}{text}{COLORS['default']}"
    print(text, file=stream)
