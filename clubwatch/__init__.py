"""clubwatch: match observation and dominance analytics."""

__version__ = "0.1.0"
