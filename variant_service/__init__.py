"""
Variant configuration service.

Derives the sellable combinations of a configurable product from its
variant groups and options.
"""

__version__ = "1.0.0"
