"""RobotModel PyTree data structure for the parsed joint set.

This module defines the immutable model built once from a robot description.
Joints are stored as stacked arrays so the whole set can be evaluated in one
JIT-compiled call; a joint's index in the model is its stable handle.
"""

from typing import Dict, List, Sequence, Tuple

import jax
import jax.numpy as jnp
from flax import struct

from jax_joint_tf.transforms import RigidTransform
from .joint import Joint, joint_type_code

Array = jax.Array


@struct.dataclass
class RobotModel:
    """Immutable PyTree representation of a robot's joints.

    Attributes:
        joint_names: Tuple of joint names. Index corresponds to joint handle.
        joint_types: Tuple of joint type names, one per joint.
        parent_links: Tuple of parent link names, one per joint.
        child_links: Tuple of child link names, one per joint.
        type_codes: Array of shape (num_joints,) with integer joint type codes.
        origins: RigidTransform batched over (num_joints,) holding the fixed
                 parent-link -> joint frame offsets.
        axes: Array of shape (num_joints, 3) with unit joint axes.
    """
    joint_names: Tuple[str, ...] = struct.field(pytree_node=False)
    joint_types: Tuple[str, ...] = struct.field(pytree_node=False)
    parent_links: Tuple[str, ...] = struct.field(pytree_node=False)
    child_links: Tuple[str, ...] = struct.field(pytree_node=False)
    type_codes: Array
    origins: RigidTransform
    axes: Array

    @classmethod
    def from_joints(cls, joints: Sequence[Joint]) -> "RobotModel":
        """Aggregate parsed joints into a model.

        A later joint with an already-seen name replaces the earlier one but
        keeps the earlier one's position.
        """
        by_name: Dict[str, Joint] = {}
        for joint in joints:
            by_name[joint.name] = joint
        ordered = list(by_name.values())

        if ordered:
            type_codes = jnp.array([joint_type_code(j.joint_type) for j in ordered], dtype=jnp.int32)
            origins = RigidTransform(
                rotation=jnp.stack([j.origin.rotation for j in ordered]),
                translation=jnp.stack([j.origin.translation for j in ordered]),
            )
            axes = jnp.stack([j.axis for j in ordered])
        else:
            type_codes = jnp.zeros((0,), dtype=jnp.int32)
            origins = RigidTransform.identity((0,))
            axes = jnp.zeros((0, 3))

        return cls(
            joint_names=tuple(j.name for j in ordered),
            joint_types=tuple(j.joint_type for j in ordered),
            parent_links=tuple(j.parent_link for j in ordered),
            child_links=tuple(j.child_link for j in ordered),
            type_codes=type_codes,
            origins=origins,
            axes=axes,
        )

    def __len__(self) -> int:
        return len(self.joint_names)

    def joint_index(self) -> Dict[str, int]:
        """Name -> handle table."""
        return {name: i for i, name in enumerate(self.joint_names)}

    def joint(self, name: str) -> Joint:
        try:
            i = self.joint_names.index(name)
        except ValueError:
            raise KeyError(f"Joint '{name}' not found in robot model")
        return self._joint_at(i)

    def joints_by_name(self) -> Dict[str, Joint]:
        return {name: self._joint_at(i) for i, name in enumerate(self.joint_names)}

    def joints_by_parent_link(self) -> Dict[str, List[Joint]]:
        out: Dict[str, List[Joint]] = {}
        for i, parent in enumerate(self.parent_links):
            out.setdefault(parent, []).append(self._joint_at(i))
        return out

    def link_parent(self) -> Dict[str, str]:
        """Child link -> parent link lookup."""
        return dict(zip(self.child_links, self.parent_links))

    def _joint_at(self, i: int) -> Joint:
        return Joint(
            name=self.joint_names[i],
            joint_type=self.joint_types[i],
            parent_link=self.parent_links[i],
            child_link=self.child_links[i],
            origin=RigidTransform(
                rotation=self.origins.rotation[i],
                translation=self.origins.translation[i],
            ),
            axis=self.axes[i],
        )
