"""A tile-based dungeon crawler through a tower of procedurally generated gates, with a pygame front end."""

__version__ = "0.1.0"