"""A recursive ray tracer with scene loading, PPM output and animation frame generation."""

__version__ = "0.1.0"