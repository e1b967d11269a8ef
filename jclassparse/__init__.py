"""Parsing and validation of Java class file constant pools, descriptors and names."""

__version__ = "0.8.1"
__all__ = [
    "binary",
    "constant_pool",
    "descriptors",
    "errors",
    "flags",
    "names",
    "pool_items",
]