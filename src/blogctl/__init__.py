"""blogctl — static site generator for a markdown blog and portfolio."""

__version__ = "0.1.0"
