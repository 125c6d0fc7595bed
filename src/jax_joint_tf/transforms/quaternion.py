"""Quaternion rotation operations in JAX.

Quaternions are stored as (..., 4) arrays in (x, y, z, w) order, which is
the layout used by the output transform messages. All functions are pure,
JIT-able, and broadcast over leading batch dimensions.
"""

from typing import Tuple

import jax
import jax.numpy as jnp

from . import vector

Array = jax.Array


def identity(batch_shape: Tuple[int, ...] = (), dtype=jnp.float64) -> Array:
    """Identity rotation(s) of the given batch shape."""
    q = jnp.array([0.0, 0.0, 0.0, 1.0], dtype=dtype)
    return jnp.broadcast_to(q, tuple(batch_shape) + (4,))


def normalize(q: Array) -> Array:
    """Normalize quaternions to unit length."""
    return q / jnp.linalg.norm(q, axis=-1, keepdims=True)


def multiply(a: Array, b: Array) -> Array:
    """
    Hamilton product a * b.

    The result applies the rotation of *b* first, then the rotation of *a*.

    Args:
        a: (..., 4) quaternion
        b: (..., 4) quaternion

    Returns:
        (..., 4) quaternion product
    """
    ax, ay, az, aw = jnp.moveaxis(a, -1, 0)
    bx, by, bz, bw = jnp.moveaxis(b, -1, 0)

    return jnp.stack([
        aw * bx + ax * bw + ay * bz - az * by,
        aw * by - ax * bz + ay * bw + az * bx,
        aw * bz + ax * by - ay * bx + az * bw,
        aw * bw - ax * bx - ay * by - az * bz,
    ], axis=-1)


def from_axis_angle(axis: Array, angle) -> Array:
    """
    Convert an axis and an angle to a quaternion.

    Args:
        axis: (..., 3) rotation axis, normalized internally
        angle: scalar or (...,) angle in radians

    Returns:
        (..., 4) quaternion, unit length unless the axis is zero
    """
    n = vector.normalize(axis)
    angle = jnp.asarray(angle)

    batch_shape = jnp.broadcast_shapes(n.shape[:-1], angle.shape)
    n = jnp.broadcast_to(n, batch_shape + (3,))
    half = jnp.broadcast_to(angle * 0.5, batch_shape)

    return jnp.concatenate([n * jnp.sin(half)[..., None], jnp.cos(half)[..., None]], axis=-1)


def from_rpy(roll, pitch, yaw) -> Array:
    """
    Convert fixed-axis roll/pitch/yaw angles to a quaternion.

    The rotation is R = Rz(yaw) @ Ry(pitch) @ Rx(roll), i.e. roll about X is
    applied first, then pitch about Y, then yaw about Z.

    Args:
        roll: scalar or (...,) rotation about X
        pitch: scalar or (...,) rotation about Y
        yaw: scalar or (...,) rotation about Z

    Returns:
        (..., 4) quaternion, unit length unless the axis is zero
    """
    roll, pitch, yaw = jnp.broadcast_arrays(
        jnp.asarray(roll, dtype=float),
        jnp.asarray(pitch, dtype=float),
        jnp.asarray(yaw, dtype=float),
    )

    cx, sx = jnp.cos(roll * 0.5), jnp.sin(roll * 0.5)
    cy, sy = jnp.cos(pitch * 0.5), jnp.sin(pitch * 0.5)
    cz, sz = jnp.cos(yaw * 0.5), jnp.sin(yaw * 0.5)

    return jnp.stack([
        cz * cy * sx - sz * sy * cx,
        cz * sy * cx + sz * cy * sx,
        sz * cy * cx - cz * sy * sx,
        cz * cy * cx + sz * sy * sx,
    ], axis=-1)


def rotate(v: Array, q: Array) -> Array:
    """
    Rotate vector(s) by quaternion(s).

    Uses v' = v + 2 * (w * (u x v) + u x (u x v)) with u the vector part of
    q, which needs no conjugate.

    Args:
        v: (..., 3) vectors
        q: (..., 4) unit quaternions

    Returns:
        (..., 3) rotated vectors
    """
    u = q[..., :3]
    w = q[..., 3:]
    uv = vector.cross(u, v)
    uuv = vector.cross(u, uv)
    return v + 2.0 * (w * uv + uuv)


def to_matrix(q: Array) -> Array:
    """
    Convert quaternions to rotation matrices.

    Args:
        q: (..., 4) quaternions in (x, y, z, w) order

    Returns:
        (..., 3, 3) rotation matrices
    """
    q = normalize(q)
    x, y, z, w = jnp.moveaxis(q, -1, 0)

    xx, yy, zz = x*x, y*y, z*z
    wx, wy, wz = w*x, w*y, w*z
    xy, xz, yz = x*y, x*z, y*z

    return jnp.stack([
        jnp.stack([1 - 2*(yy + zz), 2*(xy - wz), 2*(xz + wy)], axis=-1),
        jnp.stack([2*(xy + wz), 1 - 2*(xx + zz), 2*(yz - wx)], axis=-1),
        jnp.stack([2*(xz - wy), 2*(yz + wx), 1 - 2*(xx + yy)], axis=-1)
    ], axis=-2)
