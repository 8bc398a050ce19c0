"""goalsheet - savings goal calculator with named sheets."""

__version__ = "0.1.0"
