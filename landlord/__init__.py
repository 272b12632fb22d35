"""A terminal property-trading board game for up to four players."""

__version__ = "0.1.0"
__all__ = ["board", "console", "game", "player"]