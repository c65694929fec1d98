"""Keyboard input handler for timer controls."""

import select
import sys
import termios
import tty
from typing import Optional

# key -> timer command
KEY_BINDINGS = {
    "s": "toggle",
    " ": "toggle",
    "r": "reset",
    "d": "distraction",
    "q": "quit",
}


class KeyboardHandler:
    """Non-blocking keyboard input handler."""

    def __init__(self):
        self.fd = sys.stdin.fileno()
        self.old_settings = None
        self.setup()

    def setup(self):
        """Put the terminal in cbreak mode so single keys arrive unbuffered."""
        try:
            self.old_settings = termios.tcgetattr(self.fd)
            tty.setcbreak(self.fd)
        except termios.error:
            # not a tty (piped input)
            self.old_settings = None

    def get_key(self) -> Optional[str]:
        """
        Get a single keypress without blocking.

        Returns the key character or None if no key pressed.
        """
        if select.select([sys.stdin], [], [], 0)[0]:
            key = sys.stdin.read(1)
            return key.lower() if key else None
        return None

    def get_command(self) -> Optional[str]:
        """Read a key and translate it to a timer command."""
        key = self.get_key()
        if key is None:
            return None
        return KEY_BINDINGS.get(key)

    def stop(self):
        """Restore terminal settings."""
        if self.old_settings:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.old_settings)
