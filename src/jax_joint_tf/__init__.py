"""
JAX Joint TF: joint states to relative link transforms.

This library parses a robot description once and turns joint positions into
one parent->child rigid transform per joint, using JIT-compilable JAX math.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import transforms
from . import core
from . import io
from .engine import JointStateToTF
from .errors import RetrievalError, RetrievalFailed, RetrievalUnavailable
from .messages import ComputeOptions, JointState, TFMessage, TransformStamped

__version__ = "0.1.0"
__all__ = [
    "transforms",
    "core",
    "io",
    "JointStateToTF",
    "RetrievalError",
    "RetrievalFailed",
    "RetrievalUnavailable",
    "ComputeOptions",
    "JointState",
    "TFMessage",
    "TransformStamped",
]
