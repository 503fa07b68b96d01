"""A side-scrolling tile platformer: level parsing, game rules and a pygame front end."""

__version__ = "0.1.0"