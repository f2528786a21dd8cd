"""BreakBank — a pomodoro timer that banks the breaks you skip."""

__version__ = "0.1.0"
