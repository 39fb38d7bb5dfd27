"""Build timing recorder with statistics and CSV reports, plus a map camera model."""

__version__ = "1.0.0"