"""Version information for the result export tool."""

__version__ = "1.0.0"
