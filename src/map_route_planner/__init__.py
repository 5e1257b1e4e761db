"""Route planning and point of interest aggregation for map applications."""

__version__ = "0.1.0"
