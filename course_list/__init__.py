"""Course list generator: participant lists from registration workbooks."""

__version__ = "0.1.0"
