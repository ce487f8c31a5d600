"""rplotctl — typed chart descriptions compiled to R plotting scripts."""

__version__ = "0.1.0"
