"""Bucket container geometry."""

from dataclasses import dataclass

from spherebucket.errors import validate_positive
from spherebucket.layout.vector import Vector2


@dataclass
class Bucket:
    """A container into which objects can be placed.

    Attributes:
        position: Horizontal centre of the bucket opening
        size: (width, height) of the bucket
        caption: Label shown on the bucket
        base_color: RGBA color of the bucket body
        caption_color: RGBA color of the caption
    """

    position: Vector2 = Vector2.ZERO
    size: tuple[float, float] = (200.0, 50.0)
    caption: str = ""
    base_color: tuple[float, float, float, float] = (1.0, 0.0, 0.0, 1.0)
    caption_color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)

    def __post_init__(self) -> None:
        validate_positive(self.size[0], "size.width")
        validate_positive(self.size[1], "size.height")

    @property
    def width(self) -> float:
        """Width of the bucket opening."""
        return self.size[0]

    @property
    def height(self) -> float:
        """Height of the bucket."""
        return self.size[1]

    @property
    def left_edge(self) -> float:
        """X coordinate of the left edge."""
        return self.position.x - self.width / 2

    @property
    def right_edge(self) -> float:
        """X coordinate of the right edge."""
        return self.position.x + self.width / 2
