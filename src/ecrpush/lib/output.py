"""Terminal output helpers for ecrpush CLI."""

import os
import sys

# None = auto-detect, True = force on, False = force off
_color_enabled = None


def set_color_enabled(enabled: bool | None) -> None:
    """
    Override colour auto-detection.

    Parameters
    ----------
    enabled : bool or None
        True/False to force colours on/off, None to auto-detect again.
    """
    global _color_enabled
    _color_enabled = enabled


class Colors:
    """ANSI escape codes used by the CLI."""

    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"


def supports_color() -> bool:
    """
    Check if colour output should be used.

    Returns
    -------
    bool
        The forced preference if set, otherwise True when stdout is a TTY
        and NO_COLOR is unset.
    """
    if _color_enabled is not None:
        return _color_enabled

    if os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty() and not sys.platform.startswith("win")


def colorize(text: str, color: str) -> str:
    """Wrap text in an ANSI colour code when colours are enabled."""
    if supports_color():
        return f"{color}{text}{Colors.RESET}"
    return text


def success(message: str) -> None:
    """Print success message in green."""
    print(colorize(message, Colors.GREEN))


def error(message: str) -> None:
    """
    Print error message in red to stderr.

    Parameters
    ----------
    message : str
        Error message to display.
    """
    print(colorize(message, Colors.RED), file=sys.stderr)


def step(message: str, color: str = Colors.CYAN) -> None:
    """
    Print a step banner.

    Flushes stdout so the banner lands before the output of the
    external process that follows it.

    Parameters
    ----------
    message : str
        Banner text, e.g. "Building container".
    color : str, optional
        ANSI colour code, by default cyan.
    """
    print(colorize(message, color), flush=True)


def print_key_value(key: str, value: str, indent: int = 0) -> None:
    """Print ``key: value`` with the key in yellow."""
    indent_str = "  " * indent
    print(f"{indent_str}{colorize(key, Colors.YELLOW)}: {value}")


def print_dict(data: dict, indent: int = 0) -> None:
    """
    Print a nested dictionary with two-space indentation per level.

    Parameters
    ----------
    data : dict
        Dictionary to print.
    indent : int, optional
        Starting indentation level, by default 0.
    """
    for key, value in data.items():
        if isinstance(value, dict):
            print(f"{'  ' * indent}{colorize(key, Colors.YELLOW)}:")
            print_dict(value, indent + 1)
        else:
            print_key_value(key, str(value), indent)
