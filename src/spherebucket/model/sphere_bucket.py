"""A bucket that stores spherical objects.

Manages the addition and removal of spheres, stacks them in a pyramid
as they are added, and re-stacks them as spheres are removed so that
none is left hanging over an empty space.

The contract with the spheres is narrow: the bucket sets a sphere's
``destination`` (and ``position`` when not animating), reads its
``position`` when extracting, and listens to ``user_controlled_changed``
so that grabbing a sphere removes it from the bucket.
"""

import logging
from dataclasses import dataclass

import numpy as np
from PyQt6.QtCore import QMetaObject

from spherebucket.errors import (
    AlreadyInBucketError,
    BookkeepingError,
    NotInBucketError,
    validate_positive,
    validate_range,
)
from spherebucket.layout.pyramid import PyramidGrid, SlotIndex
from spherebucket.layout.vector import Vector2
from spherebucket.model.bucket import Bucket
from spherebucket.model.sphere import Sphere

logger = logging.getLogger(__name__)


@dataclass
class BucketConfig:
    """Configuration for a sphere bucket.

    Attributes:
        sphere_radius: Expected radius of the spheres placed in the bucket
        usable_width_proportion: Proportion of the bucket width the spheres can occupy
        vertical_particle_offset: Offset from the bucket position to the bottom
            layer (defaults to -0.4 * sphere_radius when None)
    """

    sphere_radius: float = 10.0
    usable_width_proportion: float = 1.0
    vertical_particle_offset: float | None = None

    @property
    def resolved_vertical_offset(self) -> float:
        """Vertical offset of the bottom layer."""
        if self.vertical_particle_offset is None:
            # Empirically determined
            return -self.sphere_radius * 0.4
        return self.vertical_particle_offset


class SphereBucket:
    """Pyramid-stacking container for spheres."""

    def __init__(self, bucket: Bucket | None = None, config: BucketConfig | None = None) -> None:
        """Initialize the sphere bucket.

        Args:
            bucket: Container geometry (uses defaults if None)
            config: Stacking configuration (uses defaults if None)

        Raises:
            ValidationError: If the configuration is out of range or the
                bucket cannot hold a single sphere
        """
        self.bucket = bucket or Bucket()
        self.config = config or BucketConfig()

        validate_positive(self.config.sphere_radius, "sphere_radius")
        validate_positive(self.config.usable_width_proportion, "usable_width_proportion")
        validate_range(self.config.usable_width_proportion, 0.0, 1.0, "usable_width_proportion")

        self.grid = PyramidGrid(
            origin=self.bucket.position,
            width=self.bucket.width,
            sphere_radius=self.config.sphere_radius,
            usable_width_proportion=self.config.usable_width_proportion,
            vertical_offset=self.config.resolved_vertical_offset,
        )

        # spheres managed by this bucket, in arrival order
        self._spheres: list[Sphere] = []
        self._slots: dict[Sphere, SlotIndex] = {}
        self._subscriptions: dict[Sphere, QMetaObject.Connection] = {}

    @property
    def position(self) -> Vector2:
        """Bucket origin."""
        return self.bucket.position

    @property
    def sphere_radius(self) -> float:
        """Radius of the stacked spheres."""
        return self.config.sphere_radius

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        """Spheres currently in the bucket, in arrival order."""
        return tuple(self._spheres)

    def __len__(self) -> int:
        return len(self._spheres)

    def contains_sphere(self, sphere: Sphere) -> bool:
        """Check whether a sphere is in this bucket."""
        return sphere in self._slots

    def slot_of(self, sphere: Sphere) -> SlotIndex | None:
        """Slot assigned to a sphere, or None if it is not in the bucket."""
        return self._slots.get(sphere)

    def layer_for_y(self, y: float) -> int:
        """Nearest stacking layer for a y coordinate."""
        return self.grid.layer_for_y(y)

    # ------------------------------------------------------------------
    # Adding and removing
    # ------------------------------------------------------------------

    def add_sphere_first_open(self, sphere: Sphere, animate: bool = False) -> None:
        """Add a sphere at the first open slot, scanning bottom-up.

        Args:
            sphere: Sphere to add
            animate: If False the sphere is moved to its destination at once;
                otherwise the caller animates it there
        """
        self._check_not_member(sphere)
        self._add_sphere(sphere, self.first_open_slot(), animate)

    def add_sphere_nearest_open(
        self,
        sphere: Sphere,
        reference_point: Vector2 | None = None,
        animate: bool = False,
    ) -> None:
        """Add a sphere at the supported open slot horizontally nearest a point.

        Args:
            sphere: Sphere to add
            reference_point: Point to search from (defaults to the sphere's
                current destination)
            animate: If False the sphere is moved to its destination at once
        """
        self._check_not_member(sphere)
        if reference_point is None:
            reference_point = sphere.destination

        slot = self.nearest_open_slot(reference_point)
        if slot is None:
            # Pyramid is full; park the sphere in the overflow column.
            slot = self.first_open_slot()
            logger.warning(f"No supported open slot near {reference_point!r}, using overflow slot {slot}")
        self._add_sphere(sphere, slot, animate)

    def _check_not_member(self, sphere: Sphere) -> None:
        if self.contains_sphere(sphere):
            raise AlreadyInBucketError(sphere)

    def _add_sphere(self, sphere: Sphere, slot: SlotIndex, animate: bool) -> None:
        """Register a sphere at a slot and listen for it being grabbed."""
        self._slots[sphere] = slot
        sphere.destination = self.grid.slot_location(slot)
        if not animate:
            sphere.snap_to_destination()
        self._spheres.append(sphere)

        def on_user_controlled_changed(user_controlled: bool) -> None:
            if not user_controlled:
                return
            self.remove_sphere(sphere)
            if sphere in self._subscriptions:
                raise BookkeepingError("removal listener still present after being removed from bucket")

        self._subscriptions[sphere] = sphere.user_controlled_changed.connect(on_user_controlled_changed)
        logger.debug(f"Added sphere at slot {slot} ({len(self._spheres)} in bucket)")

    def remove_sphere(self, sphere: Sphere, skip_relayout: bool = False) -> None:
        """Remove a sphere from the bucket.

        Args:
            sphere: Sphere to remove
            skip_relayout: If True the remaining spheres are not re-stacked

        Raises:
            NotInBucketError: If the sphere is not in the bucket
        """
        if not self.contains_sphere(sphere):
            raise NotInBucketError(sphere)

        self._unsubscribe(sphere)
        self._spheres.remove(sphere)
        slot = self._slots.pop(sphere)
        logger.debug(f"Removed sphere from slot {slot} ({len(self._spheres)} in bucket)")

        if not skip_relayout:
            self.relayout()

    def _unsubscribe(self, sphere: Sphere) -> None:
        """Stop listening to a sphere. Does nothing if not listening."""
        connection = self._subscriptions.pop(sphere, None)
        if connection is not None:
            sphere.user_controlled_changed.disconnect(connection)

    def extract_closest_sphere(self, point: Vector2) -> Sphere | None:
        """Take the sphere whose current position is closest to a point.

        The sphere is marked as user controlled, which removes it from the
        bucket through the listener installed when it was added.

        Args:
            point: Point to measure from

        Returns:
            The extracted sphere, or None if the bucket is empty
        """
        if not self._spheres:
            return None

        positions = np.array([(s.position.x, s.position.y) for s in self._spheres], dtype=np.float64)
        distances = np.hypot(positions[:, 0] - point.x, positions[:, 1] - point.y)
        closest = self._spheres[int(np.argmin(distances))]

        if closest.user_controlled:
            # Already held, so setting the flag again would not notify.
            self.remove_sphere(closest)
        else:
            closest.user_controlled = True
        return closest

    def reset(self) -> None:
        """Remove every sphere without re-stacking."""
        for sphere in list(self._subscriptions):
            self._unsubscribe(sphere)
        self._spheres.clear()
        self._slots.clear()

    # ------------------------------------------------------------------
    # Slot search
    # ------------------------------------------------------------------

    def _occupied_slots(self, exclude: Sphere | None = None) -> set[SlotIndex]:
        return {slot for sphere, slot in self._slots.items() if sphere is not exclude}

    def first_open_slot(self) -> SlotIndex:
        """First unoccupied slot, scanning layers bottom-up, left to right.

        Always succeeds: past the apex the overflow column provides a new
        slot on every layer.
        """
        occupied = self._occupied_slots()
        return next(slot for slot in self.grid.iter_slots() if slot not in occupied)

    def first_open_location(self) -> Vector2:
        """Location of the first open slot."""
        return self.grid.slot_location(self.first_open_slot())

    def count_supporting_spheres(self, slot: SlotIndex, occupied: set[SlotIndex] | None = None) -> int:
        """Number of occupied slots directly supporting a slot."""
        if occupied is None:
            occupied = self._occupied_slots()
        return sum(1 for below in self.grid.supporting_slots(slot) if below in occupied)

    def nearest_open_slot(self, point: Vector2, exclude: Sphere | None = None) -> SlotIndex | None:
        """Supported open slot horizontally closest to a point.

        Only the x distance is used. Using y as well makes spheres released
        above the bucket appear to fall sideways. Candidates are the open
        slots up to one layer above the highest occupied one; a slot above
        layer 0 qualifies only if both of its supports are occupied. Ties
        go to the first candidate in scan order.

        Args:
            point: Point to search from
            exclude: Sphere to treat as absent (the one being relocated)

        Returns:
            The nearest qualifying slot, or None if there is none
        """
        occupied = self._occupied_slots(exclude)
        highest_layer = max((slot.layer for slot in occupied), default=0)

        candidates = [
            slot
            for slot in self.grid.iter_slots(highest_layer + 1)
            if slot not in occupied
            and (slot.layer == 0 or self.count_supporting_spheres(slot, occupied) >= 2)
        ]
        if not candidates:
            return None

        xs = np.array([self.grid.slot_x(slot) for slot in candidates], dtype=np.float64)
        return candidates[int(np.argmin(np.abs(xs - point.x)))]

    def nearest_open_location(self, point: Vector2) -> Vector2:
        """Location of the nearest supported open slot.

        Falls back to the bucket position when no slot qualifies.
        """
        slot = self.nearest_open_slot(point)
        if slot is None:
            return self.bucket.position
        return self.grid.slot_location(slot)

    # ------------------------------------------------------------------
    # Stacking
    # ------------------------------------------------------------------

    def is_dangling(self, sphere: Sphere) -> bool:
        """Check whether a sphere hangs above an open space and should fall."""
        slot = self._slots[sphere]
        return slot.layer > 0 and self.count_supporting_spheres(slot) < 2

    def relayout(self) -> None:
        """Move dangling spheres down until none is left hanging.

        Scans the spheres in arrival order and relocates the first dangling
        one to the nearest supported open slot, then starts over. Spheres
        in the overflow column with nowhere better to go stay put.
        """
        max_moves = (len(self._spheres) + 1) ** 2
        moves = 0
        stuck: set[Sphere] = set()

        while True:
            dangling = next(
                (s for s in self._spheres if s not in stuck and self.is_dangling(s)),
                None,
            )
            if dangling is None:
                break
            if moves >= max_moves:
                logger.warning(f"Relayout stopped after {moves} moves with dangling spheres remaining")
                break

            current = self._slots[dangling]
            target = self.nearest_open_slot(self.grid.slot_location(current), exclude=dangling)
            if target is None:
                logger.debug(f"No supported slot for dangling sphere at {current}")
                stuck.add(dangling)
                continue

            self._slots[dangling] = target
            dangling.destination = self.grid.slot_location(target)
            logger.debug(f"Relayout moved sphere from {current} to {target}")
            moves += 1
            stuck.clear()
