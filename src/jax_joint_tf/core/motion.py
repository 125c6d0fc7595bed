"""Joint motion model: the variable part of a joint's transform.

The fixed origin is not included here; callers compose it separately.
"""

import jax
import jax.numpy as jnp

from jax_joint_tf.transforms import RigidTransform, quaternion, vector
from .joint import CONTINUOUS, PRISMATIC, REVOLUTE, joint_type_code

Array = jax.Array


def joint_motion(joint_type: str, axis: Array, value) -> RigidTransform:
    """Local transform produced by one joint at the given value.

    Args:
        joint_type: Joint type name; unrecognized names behave as fixed
        axis: (3,) motion axis
        value: Joint position (radians or length units)

    Returns:
        RigidTransform of the joint motion
    """
    code = jnp.asarray(joint_type_code(joint_type), dtype=jnp.int32)
    return joint_motion_batch(code, jnp.asarray(axis, dtype=float), value)


def joint_motion_batch(type_codes: Array, axes: Array, values: Array) -> RigidTransform:
    """
    Batched joint motion for many joints at once.

    Revolute and continuous joints rotate about their axis, prismatic joints
    slide along it, and fixed joints yield the identity.

    Args:
        type_codes: (...,) integer joint type codes
        axes: (..., 3) unit joint axes
        values: (...,) joint positions

    Returns:
        RigidTransform with (..., 4) rotations and (..., 3) translations
    """
    values = jnp.asarray(values, dtype=axes.dtype)

    rotating = (type_codes == REVOLUTE) | (type_codes == CONTINUOUS)
    sliding = type_codes == PRISMATIC

    rotation = jnp.where(
        rotating[..., None],
        quaternion.from_axis_angle(axes, values),
        quaternion.identity(dtype=axes.dtype),
    )
    translation = jnp.where(
        sliding[..., None],
        vector.scale(axes, values),
        jnp.zeros_like(axes),
    )

    return RigidTransform(rotation=rotation, translation=translation)
