"""Rich console shared by the command modules.

Headless commands, ``history`` tables and ``config``/``settings`` output
all print through the same console so ``--output`` formats and colours
stay consistent. The full-screen timer builds its ``Live`` display on it.
"""

from functools import lru_cache

from rich.console import Console


@lru_cache(maxsize=2)
def get_console(highlight: bool = True) -> Console:
    """Console instance, one per ``highlight`` setting."""
    return Console(highlight=highlight)
