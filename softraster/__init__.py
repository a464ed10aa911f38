"""A pure-Python software rasterizer with Phong shading, shadow mapping and SSAO."""

__version__ = "0.1.0"