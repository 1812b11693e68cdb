"""
Bounds Module - Interval Enclosures over 2D Boxes

Provides:
- Interval: closed interval with outward-rounded arithmetic
- Box: pair of intervals describing a rectangular search region
- split_box: quadrant split used by branch-and-bound
"""

from .interval import (
    Interval,
    Box,
    split_box,
    ROUND_EPS,
)

__all__ = [
    'Interval',
    'Box',
    'split_box',
    'ROUND_EPS',
]
