"""Ray tracer that renders libconfig scene files to PPM images."""

__version__ = "1.0.0"