"""Core robot model data structures for JAX Joint TF.

This module provides the joint record, the per-joint motion model and the
immutable robot model built once from a parsed description.
"""

from .joint import JOINT_TYPES, Joint, joint_type_code
from .motion import joint_motion, joint_motion_batch
from .robot_model import RobotModel

__all__ = [
    "JOINT_TYPES",
    "Joint",
    "joint_type_code",
    "joint_motion",
    "joint_motion_batch",
    "RobotModel",
]
