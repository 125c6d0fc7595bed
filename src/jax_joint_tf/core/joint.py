"""Joint record and joint type codes."""

import jax
from flax import struct

from jax_joint_tf.transforms import RigidTransform

Array = jax.Array

FIXED = 0
REVOLUTE = 1
CONTINUOUS = 2
PRISMATIC = 3

JOINT_TYPES = {
    "fixed": FIXED,
    "revolute": REVOLUTE,
    "continuous": CONTINUOUS,
    "prismatic": PRISMATIC,
}


def joint_type_code(joint_type: str) -> int:
    """Integer code for a joint type name; unknown names map to fixed."""
    return JOINT_TYPES.get(joint_type, FIXED)


@struct.dataclass
class Joint:
    """A single joint of the robot description.

    Attributes:
        name: Unique joint name.
        joint_type: One of ``JOINT_TYPES``.
        parent_link: Link the joint is attached to.
        child_link: Link moved by the joint.
        origin: Fixed transform from the parent link frame to the joint frame.
        axis: (3,) unit motion axis expressed in the joint frame.
    """
    name: str = struct.field(pytree_node=False)
    joint_type: str = struct.field(pytree_node=False)
    parent_link: str = struct.field(pytree_node=False)
    child_link: str = struct.field(pytree_node=False)
    origin: RigidTransform
    axis: Array

    @property
    def type_code(self) -> int:
        return joint_type_code(self.joint_type)
