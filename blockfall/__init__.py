"""A falling-block puzzle game: piece shapes, game rules and a pygame window."""

__version__ = "0.1.0"
__all__ = ["app", "board", "pieces"]