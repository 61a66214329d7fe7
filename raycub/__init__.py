"""Textured ray-casting maze walker for .cub scene files: parsing, validation, ray casting and a pygame front end."""

__version__ = "0.1.0"