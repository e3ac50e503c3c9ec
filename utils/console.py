# =============================================================================
# utils/console.py - Terminal colors
# =============================================================================

import sys

COLORS = {
    'green': '\033[32m',
    'yellow': '\033[33m',
    'red': '\033[31m',
}
RESET = '\033[0m'


def colorize(text: str, color: str, stream=None) -> str:
    """Wrap text in an ANSI color when writing to a terminal"""
    stream = stream or sys.stdout
    if color not in COLORS or not getattr(stream, 'isatty', lambda: False)():
        return text
    return f"{COLORS[color]}{text}{RESET}"
