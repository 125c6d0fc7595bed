"""
JAX-based transforms library for joint-level forward kinematics.

This module provides pure, JIT-compilable implementations of:
- 3D vector helpers (vector module)
- quaternion rotations in (x, y, z, w) order (quaternion module)
- rigid transforms as rotation + translation pairs (transform module)

All functions are stateless and accept arbitrary leading batch dimensions.
"""

from . import vector
from . import quaternion
from . import transform
from .transform import RigidTransform, compose

__all__ = [
    "vector",
    "quaternion",
    "transform",
    "RigidTransform",
    "compose",
]
