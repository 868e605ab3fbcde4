"""taskol: keep a flat directory of links to in-progress task folders."""

__version__ = "0.3.0"
