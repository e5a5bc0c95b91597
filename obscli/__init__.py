"""obscli: declarative reconciliation of Open Build Service projects."""

__version__ = "0.1.0"
