"""Pyramid slot geometry for stacking spheres in a bucket.

Slots are addressed by integer ``(layer, column)`` indices. Coordinates
are derived from the indices only when a location is needed, so the
occupancy and support rules never compare floating point values.
"""

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np

from spherebucket.errors import ValidationError
from spherebucket.layout.vector import Vector2

# Vertical distance between layer centres, in sphere diameters, for
# triangular close packing of circles.
LAYER_HEIGHT_FACTOR = 0.866

# Lateral reach of a supporting sphere, in sphere radii.
SUPPORT_RANGE = 3


@dataclass(frozen=True, order=True)
class SlotIndex:
    """Position of a slot within the stacking pyramid.

    Ordering follows the scan order: layers bottom-up, then
    columns left-to-right.

    Attributes:
        layer: Layer index, 0 at the bottom
        column: Column index within the layer, 0 at the left
    """

    layer: int
    column: int


class PyramidGrid:
    """Slot geometry of a pyramid stack inside a bucket.

    Layer 0 holds as many spheres as fit in the usable width. Each layer
    above holds one fewer and is shifted inward by one radius. Once the
    apex (a single slot) is reached, every further layer is a single slot
    directly above it. That overflow column is not a stable stack; it only
    keeps placement from failing when more spheres arrive than the pyramid
    holds.
    """

    def __init__(
        self,
        origin: Vector2,
        width: float,
        sphere_radius: float,
        usable_width_proportion: float,
        vertical_offset: float,
    ) -> None:
        """Initialize the grid.

        Args:
            origin: Bucket origin (horizontal centre of the opening)
            width: Bucket width
            sphere_radius: Radius of the stacked spheres
            usable_width_proportion: Fraction of the width available for stacking
            vertical_offset: Offset from the origin to the bottom layer

        Raises:
            ValidationError: If not even one sphere fits in the bottom layer
        """
        self.origin = origin
        self.width = width
        self.sphere_radius = sphere_radius
        self.vertical_offset = vertical_offset

        self.usable_width = width * usable_width_proportion - 2 * sphere_radius
        self.base_count = math.floor(self.usable_width / (sphere_radius * 2))
        if self.base_count < 1:
            raise ValidationError(
                "usable_width",
                self.usable_width,
                f"room for at least one sphere of radius {sphere_radius}",
            )

        # x of column 0 on layer 0
        self._base_x = origin.x - width / 2 + (width - self.usable_width) / 2 + sphere_radius
        self._bottom_y = origin.y + vertical_offset
        self._layer_height = sphere_radius * 2 * LAYER_HEIGHT_FACTOR

    @property
    def apex_layer(self) -> int:
        """Index of the single-slot top layer of the pyramid."""
        return self.base_count - 1

    @property
    def capacity(self) -> int:
        """Number of slots in the pyramid proper (overflow column excluded)."""
        return self.base_count * (self.base_count + 1) // 2

    def slot_count(self, layer: int) -> int:
        """Number of slots in a layer."""
        return max(self.base_count - layer, 1)

    def lateral_units(self, slot: SlotIndex) -> int:
        """Horizontal offset of a slot from column 0 of layer 0, in radii."""
        return min(slot.layer, self.apex_layer) + 2 * slot.column

    def contains(self, slot: SlotIndex) -> bool:
        """Check whether an index names a slot of this grid."""
        return slot.layer >= 0 and 0 <= slot.column < self.slot_count(slot.layer)

    def layer_y(self, layer: int) -> float:
        """Y coordinate of a layer's centre line."""
        return self._bottom_y + layer * self._layer_height

    def layer_for_y(self, y: float) -> int:
        """Nearest layer index for a y coordinate.

        Halves round away from zero.
        """
        steps = abs((y - self._bottom_y) / self._layer_height)
        return int(math.floor(steps + 0.5))

    def slot_x(self, slot: SlotIndex) -> float:
        """X coordinate of a slot's centre."""
        return self._base_x + self.lateral_units(slot) * self.sphere_radius

    def slot_location(self, slot: SlotIndex) -> Vector2:
        """Centre of a slot in model coordinates."""
        return Vector2(self.slot_x(slot), self.layer_y(slot.layer))

    def layer_x_array(self, layer: int) -> np.ndarray:
        """X coordinates of every slot in a layer, left to right."""
        start = self._base_x + min(layer, self.apex_layer) * self.sphere_radius
        return start + np.arange(self.slot_count(layer)) * 2 * self.sphere_radius

    def iter_layer(self, layer: int) -> Iterator[SlotIndex]:
        """Yield the slots of a layer left to right."""
        for column in range(self.slot_count(layer)):
            yield SlotIndex(layer, column)

    def iter_slots(self, max_layer: int | None = None) -> Iterator[SlotIndex]:
        """Yield slots bottom-up, left-to-right.

        Args:
            max_layer: Last layer to include. Unbounded when None, in which
                case the overflow column continues indefinitely.
        """
        layer = 0
        while max_layer is None or layer <= max_layer:
            yield from self.iter_layer(layer)
            layer += 1

    def supporting_slots(self, slot: SlotIndex) -> list[SlotIndex]:
        """Slots in the layer directly below that can support a slot.

        A lower slot supports when its lateral offset is within
        ``SUPPORT_RANGE`` radii. Inside the pyramid that gives the two
        slots the sphere rests between; in the overflow column only the
        single slot beneath.

        Args:
            slot: Slot to find supports for

        Returns:
            Supporting slots, left to right (empty for layer 0)
        """
        if slot.layer == 0:
            return []
        units = self.lateral_units(slot)
        return [
            below
            for below in self.iter_layer(slot.layer - 1)
            if abs(self.lateral_units(below) - units) < SUPPORT_RANGE
        ]
