"""Joint state -> TF conversion backed by a parsed robot description.

The description is parsed once when the engine is created. After that only
joint values change, so repeated updates and computes stay cheap.
"""

import inspect
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional, Tuple, Union

import jax.numpy as jnp
import numpy as np

from .chain import relative_transforms
from .core import RobotModel
from .io import fetch_text, load_urdf, parse_urdf
from .messages import (
    ComputeOptions,
    Header,
    JointState,
    Quaternion,
    TFMessage,
    Time,
    Transform,
    TransformStamped,
    Vector3,
)

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], Union[Awaitable[str], str]]


class JointStateToTF:
    """Converts joint states into relative parent -> child link transforms.

    Holds the immutable RobotModel and one value per joint, addressed by the
    joint's handle in the model. Not thread-safe; guard an instance shared
    across threads with a lock.
    """

    def __init__(self, model: RobotModel) -> None:
        self._model = model
        self._index: Dict[str, int] = model.joint_index()
        self._values = np.zeros(len(model), dtype=np.float64)

    # Constructors
    @classmethod
    def from_xml(cls, xml: str) -> "JointStateToTF":
        """Create an engine by parsing URDF text."""
        return cls(parse_urdf(xml))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JointStateToTF":
        """Create an engine from a URDF file on disk."""
        return cls(load_urdf(path))

    @classmethod
    async def from_url(cls, url: str, fetch: Optional[FetchFn] = None) -> "JointStateToTF":
        """Create an engine from URDF text retrieved from *url*.

        Args:
            url: Locator of the description.
            fetch: Callable returning the text (or an awaitable of it) for a
                   locator. Defaults to :func:`jax_joint_tf.io.fetch_text`.

        Raises:
            RetrievalError: The text could not be obtained.
        """
        fetch = fetch or fetch_text
        text = fetch(url)
        if inspect.isawaitable(text):
            text = await text
        return cls.from_xml(text)

    # Accessors
    @property
    def model(self) -> RobotModel:
        return self._model

    @property
    def joint_names(self) -> Tuple[str, ...]:
        return self._model.joint_names

    @property
    def joint_values(self) -> Dict[str, float]:
        return {name: float(self._values[i]) for name, i in self._index.items()}

    # Runtime
    def set_joint_state(self, joint_state: JointState) -> None:
        """Set joint values from a joint state; unknown names are ignored."""
        for name, pos in joint_state.positions_by_name().items():
            i = self._index.get(name)
            if i is None:
                logger.debug(f"Ignoring state for unknown joint '{name}'")
                continue
            self._values[i] = pos

    def compute(self, options: Optional[ComputeOptions] = None) -> TFMessage:
        """Compute the parent -> child transform of every joint.

        Transforms are relative to each joint's parent link and come out in
        model order; they are not chained towards a root frame.
        """
        options = options or ComputeOptions()
        stamp = Time.from_nanoseconds(options.publish_time_ns)

        if len(self._model) == 0:
            return TFMessage(transforms=[])

        relative = relative_transforms(self._model, jnp.asarray(self._values))
        rotations = np.asarray(relative.rotation)
        translations = np.asarray(relative.translation)

        transforms = []
        for i in range(len(self._model)):
            t = translations[i]
            r = rotations[i]
            transforms.append(TransformStamped(
                header=Header(stamp=stamp, frame_id=self._model.parent_links[i]),
                child_frame_id=self._model.child_links[i],
                transform=Transform(
                    translation=Vector3(x=float(t[0]), y=float(t[1]), z=float(t[2])),
                    rotation=Quaternion(x=float(r[0]), y=float(r[1]), z=float(r[2]), w=float(r[3])),
                ),
            ))

        return TFMessage(transforms=transforms)

    def compute_from_joint_state(
        self, joint_state: JointState, options: Optional[ComputeOptions] = None
    ) -> TFMessage:
        """Set joint values, then compute transforms."""
        self.set_joint_state(joint_state)
        return self.compute(options)
