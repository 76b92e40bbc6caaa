"""kubepulse: a read-only cluster snapshot backend for a static dashboard."""

__version__ = "0.1.0"
