"""A small top-down space game with a menu, an overlay, sprite-index tools and a web build server."""

__version__ = "0.1.0"