"""Colored console status output."""

import os
import sys

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
NC = "\033[0m"


def supports_color(stream):
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


class Reporter:
    """Print categorized status lines: [INFO], [SUCCESS], [WARNING] and [ERROR]."""

    def __init__(self, stream=None, color=None):
        self.stream = stream if stream is not None else sys.stdout
        self.color = supports_color(self.stream) if color is None else color

    def _emit(self, tag, color, message):
        if self.color:
            tag = f"{color}{tag}{NC}"
        print(f"{tag} {message}", file=self.stream, flush=True)

    def info(self, message):
        self._emit("[INFO]", BLUE, message)

    def success(self, message):
        self._emit("[SUCCESS]", GREEN, message)

    def warning(self, message):
        self._emit("[WARNING]", YELLOW, message)

    def error(self, message):
        self._emit("[ERROR]", RED, message)
