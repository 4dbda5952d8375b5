"""DocSite - a small documentation-site server with in-memory search."""

__version__ = "0.1.0"
