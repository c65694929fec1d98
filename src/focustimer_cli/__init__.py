"""Focus Timer CLI - a Pomodoro focus timer for the terminal."""

__version__ = "0.1.0"
