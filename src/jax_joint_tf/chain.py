"""Core kinematics algorithm: per-joint relative transforms.

Every joint is evaluated independently as origin ∘ motion(value), so the
whole model is computed in one vectorized, JIT-compiled call. No traversal
towards a root frame is performed.
"""

import jax
from jax import Array

from .core import RobotModel, joint_motion_batch
from .transforms import RigidTransform


@jax.jit
def relative_transforms(robot: RobotModel, q: Array) -> RigidTransform:
    """Compute the parent -> child transform of every joint.

    Args:
        robot: RobotModel containing the joint set
        q: Joint values array of shape (num_joints,), ordered by joint handle

    Returns:
        RigidTransform batched over (num_joints,)
    """
    motion = joint_motion_batch(robot.type_codes, robot.axes, q)
    return robot.origins.compose(motion)
