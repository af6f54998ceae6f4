"""Catalog API - products and hierarchical product categories."""

__version__ = "0.1.0"
