"""shortlink: short, human-typeable links to arbitrary URLs."""

__version__ = "0.1.0"
