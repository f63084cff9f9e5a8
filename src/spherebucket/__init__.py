"""spherebucket - pyramid stacking of spheres inside a bucket."""

from spherebucket.errors import (
    AlreadyInBucketError,
    BookkeepingError,
    NotInBucketError,
    SphereBucketError,
    ValidationError,
)
from spherebucket.layout import PyramidGrid, SlotIndex, Vector2
from spherebucket.model import Bucket, BucketConfig, Sphere, SphereBucket

__version__ = "0.1.0"

__all__ = [
    "AlreadyInBucketError",
    "BookkeepingError",
    "Bucket",
    "BucketConfig",
    "NotInBucketError",
    "PyramidGrid",
    "SlotIndex",
    "Sphere",
    "SphereBucket",
    "SphereBucketError",
    "ValidationError",
    "Vector2",
]
