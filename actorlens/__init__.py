"""
actorlens - character summaries from a virtual tabletop.

Queries a tabletop host (through its bridge module) for actor records and
reshapes them into compact summaries for WFRP 4e and D&D 5e style systems.
"""

__version__ = "0.1.0"
