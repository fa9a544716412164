"""Access control core for the business intranet portal."""

__version__ = "0.1.0"
