"""Joint state input and transform output messages.

The shapes follow the ROS ``sensor_msgs/JointState`` and
``tf2_msgs/TFMessage`` conventions so results can be handed to a transform
broadcaster or serialized as JSON without conversion.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

NANOSECONDS_PER_SECOND = 1_000_000_000


@dataclass(frozen=True)
class Time:
    sec: int = 0
    nanosec: int = 0

    @classmethod
    def from_nanoseconds(cls, ns: Optional[int]) -> "Time":
        """Split a nanosecond timestamp into whole seconds and remainder."""
        if not ns:
            return cls()
        sec, nanosec = divmod(int(ns), NANOSECONDS_PER_SECOND)
        return cls(sec=sec, nanosec=nanosec)

    def to_dict(self) -> Dict[str, int]:
        return {"sec": self.sec, "nanosec": self.nanosec}


@dataclass(frozen=True)
class Header:
    stamp: Time = field(default_factory=Time)
    frame_id: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"stamp": self.stamp.to_dict(), "frame_id": self.frame_id}


@dataclass
class JointState:
    """Joint positions keyed by the parallel ``name`` / ``position`` lists.

    ``velocity`` and ``effort`` are carried for completeness and ignored by
    the kinematics.
    """
    name: List[str] = field(default_factory=list)
    position: List[Optional[float]] = field(default_factory=list)
    velocity: List[float] = field(default_factory=list)
    effort: List[float] = field(default_factory=list)
    header: Header = field(default_factory=Header)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "JointState":
        header = data.get("header") or {}
        stamp = header.get("stamp") or {}
        return cls(
            name=list(data.get("name") or []),
            position=list(data.get("position") or []),
            velocity=list(data.get("velocity") or []),
            effort=list(data.get("effort") or []),
            header=Header(
                stamp=Time(sec=int(stamp.get("sec", 0)), nanosec=int(stamp.get("nanosec", 0))),
                frame_id=header.get("frame_id", ""),
            ),
        )

    def positions_by_name(self) -> Dict[str, float]:
        """Name -> position; later duplicates win, missing positions are 0."""
        out: Dict[str, float] = {}
        for i, name in enumerate(self.name):
            pos = self.position[i] if i < len(self.position) else None
            out[name] = 0.0 if pos is None else float(pos)
        return out


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z}


@dataclass(frozen=True)
class Quaternion:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "z": self.z, "w": self.w}


@dataclass(frozen=True)
class Transform:
    translation: Vector3 = field(default_factory=Vector3)
    rotation: Quaternion = field(default_factory=Quaternion)

    def to_dict(self) -> Dict[str, Any]:
        return {"translation": self.translation.to_dict(), "rotation": self.rotation.to_dict()}


@dataclass(frozen=True)
class TransformStamped:
    """Transform of ``child_frame_id`` relative to ``header.frame_id``."""
    header: Header
    child_frame_id: str
    transform: Transform

    @property
    def parent_link(self) -> str:
        return self.header.frame_id

    @property
    def child_link(self) -> str:
        return self.child_frame_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "child_frame_id": self.child_frame_id,
            "transform": self.transform.to_dict(),
        }


@dataclass(frozen=True)
class TFMessage:
    transforms: List[TransformStamped] = field(default_factory=list)

    def find(self, child_link: str) -> Optional[TransformStamped]:
        """First transform whose child frame is *child_link*, if any."""
        for t in self.transforms:
            if t.child_frame_id == child_link:
                return t
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {"transforms": [t.to_dict() for t in self.transforms]}


@dataclass(frozen=True)
class ComputeOptions:
    """Options for a compute call.

    Attributes:
        publish_time_ns: Stamp for every output transform, in nanoseconds.
                         When omitted the stamp is zero.
    """
    publish_time_ns: Optional[int] = None
