"""Slot geometry for sphere stacking.

This module contains the pyramid grid used to compute where
spheres rest inside a bucket.
"""

from spherebucket.layout.pyramid import PyramidGrid, SlotIndex
from spherebucket.layout.vector import Vector2

__all__ = ["PyramidGrid", "SlotIndex", "Vector2"]
