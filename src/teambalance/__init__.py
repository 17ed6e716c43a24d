"""Split a roster into skill- and position-balanced teams."""

__version__ = "0.1.0"
