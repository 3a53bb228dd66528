"""Towerforge - Wave Function Collapse structure generation for defender towers."""

__version__ = "0.1.0"
