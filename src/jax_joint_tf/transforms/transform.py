"""Rigid-body transforms as (quaternion, translation) pairs in JAX."""

from __future__ import annotations

from typing import Tuple

import jax
import jax.numpy as jnp
from flax import struct

from . import quaternion, vector

Array = jax.Array


@struct.dataclass
class RigidTransform:
    """Immutable rigid transform(s) mapping a local frame into a reference frame.

    Attributes:
        rotation: (..., 4) quaternion in (x, y, z, w) order.
        translation: (..., 3) translation of the local origin.
    """
    rotation: Array
    translation: Array

    # Constructors
    @classmethod
    def identity(cls, batch_shape: Tuple[int, ...] = (), *, dtype=jnp.float64) -> "RigidTransform":
        return cls(
            rotation=quaternion.identity(batch_shape, dtype=dtype),
            translation=jnp.zeros(tuple(batch_shape) + (3,), dtype=dtype),
        )

    @classmethod
    def from_xyz_rpy(cls, xyz: Array, rpy: Array) -> "RigidTransform":
        """Build from a translation and fixed-axis roll/pitch/yaw angles."""
        xyz = jnp.asarray(xyz, dtype=float)
        rpy = jnp.asarray(rpy, dtype=float)
        return cls(
            rotation=quaternion.from_rpy(rpy[..., 0], rpy[..., 1], rpy[..., 2]),
            translation=xyz,
        )

    # Basic operations
    def compose(self, other: "RigidTransform") -> "RigidTransform":
        """Self ∘ other (apply *other* first, then self)."""
        return compose(self, other)

    def apply(self, points: Array) -> Array:
        """Map (..., 3) points from the local frame into the reference frame."""
        return vector.add(self.translation, quaternion.rotate(points, self.rotation))

    # Convenience helpers
    def to_matrix(self) -> Array:
        """(..., 4, 4) homogeneous matrix of the transform."""
        R = quaternion.to_matrix(self.rotation)
        batch_shape = R.shape[:-2]

        T = jnp.zeros(batch_shape + (4, 4), dtype=R.dtype)
        T = T.at[..., :3, :3].set(R)
        T = T.at[..., :3, 3].set(jnp.broadcast_to(self.translation, batch_shape + (3,)))
        T = T.at[..., 3, 3].set(1.0)
        return T


def compose(a: RigidTransform, b: RigidTransform) -> RigidTransform:
    """
    Compose two rigid transforms: apply *b* first, then *a*.

    Args:
        a: outer transform (e.g. parent -> joint frame)
        b: inner transform (e.g. joint motion)

    Returns:
        RigidTransform equivalent to a ∘ b
    """
    return RigidTransform(
        rotation=quaternion.multiply(a.rotation, b.rotation),
        translation=vector.add(a.translation, quaternion.rotate(b.translation, a.rotation)),
    )
