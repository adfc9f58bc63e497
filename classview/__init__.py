"""classview: Java inheritance-chain class diagrams."""

__version__ = "0.1.0"
