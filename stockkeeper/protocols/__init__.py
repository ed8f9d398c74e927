"""
Stockkeeper Protocols.

Defines the lookups the pure modules consume.
"""

from stockkeeper.protocols.lookups import ParentLookup, SequenceLookup

__all__ = [
    "ParentLookup",
    "SequenceLookup",
]
