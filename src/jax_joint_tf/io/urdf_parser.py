"""URDF parser for loading joint sets into JAX-native data structures.

The description is scanned as tagged text rather than validated as a whole
XML document: each ``<joint>...</joint>`` block is read on its own, and a
block that lacks a name, a parent or a child link is skipped.
"""

import logging
import math
import re
from pathlib import Path
from typing import Dict, List, Optional, Union

import jax.numpy as jnp
from lxml import etree

from jax_joint_tf.core.joint import JOINT_TYPES, Joint
from jax_joint_tf.core.robot_model import RobotModel
from jax_joint_tf.transforms import RigidTransform, quaternion, vector

logger = logging.getLogger(__name__)

_JOINT_BLOCK = re.compile(r"<joint\b[\s\S]*?</joint>")
_JOINT_OPEN = re.compile(r"<joint\b([^>]*)>")
_ATTR = re.compile(r"""([^\s=/"'<>]+)\s*=\s*("[^"]*"|'[^']*')""")
# '&' that does not start a predefined entity or character reference
_BARE_AMP = re.compile(r"&(?!(?:amp|lt|gt|quot|apos|#[0-9]+|#x[0-9a-fA-F]+);)")

# Parses the attribute text of a single tag; recover mode tolerates junk.
_ATTR_PARSER = etree.XMLParser(recover=True, resolve_entities=False, no_network=True)


def load_urdf(urdf_path: Union[str, Path]) -> RobotModel:
    """Load a URDF file and convert it to a RobotModel PyTree.

    Args:
        urdf_path: Path to the URDF file to load.

    Returns:
        RobotModel: A JAX-native joint set.
    """
    text = Path(urdf_path).read_text(encoding="utf-8")
    return parse_urdf(text)


def parse_urdf(text: str) -> RobotModel:
    """Parse URDF text into a RobotModel.

    Never raises for malformed joints; they are left out of the model.

    Args:
        text: Robot description markup.

    Returns:
        RobotModel: The joints that could be parsed, in document order.
    """
    if not isinstance(text, str):
        raise TypeError(f"URDF text must be str, got {type(text).__name__}")

    blocks = extract_joint_blocks(text)
    joints = [j for j in (parse_joint_block(b) for b in blocks) if j is not None]

    model = RobotModel.from_joints(joints)
    logger.info(f"Parsed {len(model)} joints from {len(blocks)} joint blocks")
    return model


def extract_joint_blocks(text: str) -> List[str]:
    """All ``<joint ...>...</joint>`` blocks, in order of appearance."""
    return _JOINT_BLOCK.findall(text)


def parse_joint_block(block: str) -> Optional[Joint]:
    """Parse one joint block, or return None if it is unusable."""
    open_match = _JOINT_OPEN.search(block)
    if open_match is None:
        return None
    attrs = _parse_attrs("joint", open_match.group(1))

    name = attrs.get("name", "").strip()
    joint_type = attrs.get("type", "fixed").strip()
    if joint_type not in JOINT_TYPES:
        joint_type = "fixed"

    parent_link = _self_closing_attr(block, "parent", "link")
    child_link = _self_closing_attr(block, "child", "link")
    if not name or not parent_link or not child_link:
        logger.debug(f"Skipping joint block without name/parent/child: {name!r}")
        return None

    origin_attrs = _first_tag_attrs(block, "origin") or {}
    xyz = _parse_triple(origin_attrs.get("xyz"), (0.0, 0.0, 0.0))
    rpy = _parse_triple(origin_attrs.get("rpy"), (0.0, 0.0, 0.0))
    origin = RigidTransform(
        rotation=quaternion.from_rpy(*rpy),
        translation=jnp.array(xyz),
    )

    axis_attrs = _first_tag_attrs(block, "axis") or {}
    axis = vector.normalize(jnp.array(_parse_triple(axis_attrs.get("xyz"), (1.0, 0.0, 0.0))))

    return Joint(
        name=name,
        joint_type=joint_type,
        parent_link=parent_link,
        child_link=child_link,
        origin=origin,
        axis=axis,
    )


def _parse_attrs(tag: str, attr_text: str) -> Dict[str, str]:
    """Attributes of a tag given the text between its name and ``>``."""
    # Later duplicates win; stray '&' and '<' are kept as literal text.
    quoted_by_name: Dict[str, str] = {}
    for key, quoted in _ATTR.findall(attr_text):
        quoted_by_name[key] = _BARE_AMP.sub("&amp;", quoted).replace("<", "&lt;")
    attr_text = "".join(f" {k}={v}" for k, v in quoted_by_name.items())

    try:
        element = etree.fromstring(f"<{tag}{attr_text}/>", parser=_ATTR_PARSER)
    except etree.XMLSyntaxError:
        return {}
    if element is None:
        return {}
    return {str(k): str(v) for k, v in element.attrib.items()}


def _self_closing_attr(block: str, tag: str, attr: str) -> Optional[str]:
    """Attribute of the first ``<tag .../>`` element; open/close pairs do not count."""
    m = re.search(rf"<{tag}\b([^>]*)/>", block)
    if m is None:
        return None
    value = _parse_attrs(tag, m.group(1)).get(attr)
    return value.strip() if value is not None else None


def _first_tag_attrs(block: str, tag: str) -> Optional[Dict[str, str]]:
    """Attributes of the first self-closing ``<tag/>``, else the first opening ``<tag>``."""
    m = re.search(rf"<{tag}\b([^>]*)/>", block)
    if m is None:
        m = re.search(rf"<{tag}\b([^>]*)>", block)
    if m is None:
        return None
    return _parse_attrs(tag, m.group(1))


def _parse_triple(text: Optional[str], default):
    """Three floats from whitespace-separated text; bad or missing tokens are 0."""
    if not text:
        return default
    tokens = text.split()
    return tuple(_to_float(tokens[i]) if i < len(tokens) else 0.0 for i in range(3))


def _to_float(token: str) -> float:
    try:
        value = float(token)
    except ValueError:
        return 0.0
    return 0.0 if math.isnan(value) else value
