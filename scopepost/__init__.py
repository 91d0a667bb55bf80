"""Oscilloscope sample post-processing, unit formatting, firmware image parsing and USB status text."""

__version__ = "0.1.0"