"""Model layer for spherebucket.

This module contains the spheres, the bucket geometry and the
sphere bucket that stacks spheres inside it.
"""

from spherebucket.model.bucket import Bucket
from spherebucket.model.sphere import Sphere
from spherebucket.model.sphere_bucket import BucketConfig, SphereBucket

__all__ = ["Bucket", "BucketConfig", "Sphere", "SphereBucket"]
