"""
Analysis Passes

- Value numbering (function-wide local value numbering)
"""

from .value_numbering import ValueNumberingPass

__all__ = [
    'ValueNumberingPass',
]
