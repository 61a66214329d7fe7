"""Error type and clock helper shared by the whole package."""

from __future__ import annotations

import time


class CubError(Exception):
    """A fatal problem with the scene, its arguments or its resources."""

    def __init__(self, category, message):
        super().__init__(f"{category}: {message}")
        self.category = category
        self.message = message

    def report(self) -> str:
        """Return the text shown to the user when the program stops."""
        return f"Error\ncub3D: {self.category}: {self.message}\n"


def get_time() -> int:
    """Return the current time in tenths of a second since the epoch."""
    return time.time_ns() // 100_000_000