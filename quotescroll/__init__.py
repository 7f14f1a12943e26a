"""quotescroll: a personal feed of your Readwise highlights."""

__version__ = "0.1.0"
