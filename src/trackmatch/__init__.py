"""trackmatch - identify shipping carriers from tracking numbers."""

__version__ = "0.1.0"
