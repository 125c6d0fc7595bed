"""3D vector helpers in JAX."""

import jax
import jax.numpy as jnp

Array = jax.Array


def add(a: Array, b: Array) -> Array:
    return a + b


def scale(v: Array, s) -> Array:
    """Scale (..., 3) vectors by a scalar or a (...,) array of scalars."""
    return v * jnp.asarray(s)[..., None]


def length(v: Array) -> Array:
    return jnp.linalg.norm(v, axis=-1)


def cross(a: Array, b: Array) -> Array:
    return jnp.cross(a, b)


def normalize(v: Array) -> Array:
    """
    Normalize vectors to unit length.

    A zero-length vector is divided by 1 instead, so it comes back unchanged
    rather than as NaN.

    Args:
        v: (..., 3) vectors

    Returns:
        (..., 3) normalized vectors
    """
    v = jnp.asarray(v)
    n = jnp.linalg.norm(v, axis=-1, keepdims=True)
    n = jnp.where(n == 0, 1.0, n)
    return v / n
