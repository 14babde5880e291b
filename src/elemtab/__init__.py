"""Interactive periodic table viewer."""

__version__ = "0.1.0"
