"""Sphere that can be stored in a sphere bucket."""

from PyQt6.QtCore import QObject, pyqtSignal

from spherebucket.layout.vector import Vector2


class Sphere(QObject):
    """A spherical object with observable placement state.

    Signals are emitted only when a value actually changes.
    """

    # Signals
    position_changed = pyqtSignal(object)  # Emits new position (Vector2)
    destination_changed = pyqtSignal(object)  # Emits new destination (Vector2)
    user_controlled_changed = pyqtSignal(bool)  # Emits new held-by-user state

    def __init__(
        self,
        position: Vector2 = Vector2.ZERO,
        radius: float = 10.0,
        parent: QObject | None = None,
    ) -> None:
        """Initialize the sphere.

        Args:
            position: Initial position, also used as the initial destination
            radius: Sphere radius
            parent: Optional Qt parent object
        """
        super().__init__(parent)
        self.radius = radius
        self._position = position
        self._destination = position
        self._user_controlled = False

    @property
    def position(self) -> Vector2:
        """Current (possibly in-transit) location."""
        return self._position

    @position.setter
    def position(self, value: Vector2) -> None:
        if value != self._position:
            self._position = value
            self.position_changed.emit(value)

    @property
    def destination(self) -> Vector2:
        """Location the sphere is heading to."""
        return self._destination

    @destination.setter
    def destination(self, value: Vector2) -> None:
        if value != self._destination:
            self._destination = value
            self.destination_changed.emit(value)

    @property
    def user_controlled(self) -> bool:
        """Whether the user is holding the sphere."""
        return self._user_controlled

    @user_controlled.setter
    def user_controlled(self, value: bool) -> None:
        value = bool(value)
        if value != self._user_controlled:
            self._user_controlled = value
            self.user_controlled_changed.emit(value)

    def snap_to_destination(self) -> None:
        """Move the sphere to its destination immediately."""
        self.position = self._destination

    def __repr__(self) -> str:
        """String representation."""
        return f"Sphere(position={self._position!r}, destination={self._destination!r})"
