"""Finding store and source-sync validator for Slither analysis results."""

__version__ = "0.3.0"
