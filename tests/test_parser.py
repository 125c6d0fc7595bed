"""Tests for URDF parser functionality."""

import jax
import jax.numpy as jnp
import numpy as np
import pytest

from jax_joint_tf.core import RobotModel
from jax_joint_tf.io import load_urdf, parse_urdf
from jax_joint_tf.io.urdf_parser import extract_joint_blocks, parse_joint_block


def _joint(body: str, attrs: str = 'name="j" type="revolute"') -> str:
    return f"<joint {attrs}>{body}</joint>"


LINKS = '<parent link="a"/><child link="b"/>'


def test_parse_mini_urdf(mini_urdf):
    """Test parsing the two-joint description and verify RobotModel structure."""
    robot = parse_urdf(mini_urdf)

    assert isinstance(robot, RobotModel)
    assert robot.joint_names == ("joint1", "joint2")
    assert robot.joint_types == ("revolute", "prismatic")
    assert robot.parent_links == ("base_link", "link1")
    assert robot.child_links == ("link1", "link2")

    assert robot.type_codes.shape == (2,)
    assert robot.origins.rotation.shape == (2, 4)
    assert robot.origins.translation.shape == (2, 3)
    assert robot.axes.shape == (2, 3)

    np.testing.assert_allclose(robot.origins.translation, [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
    np.testing.assert_allclose(robot.origins.rotation, [[0.0, 0.0, 0.0, 1.0]] * 2)
    np.testing.assert_allclose(robot.axes, [[0.0, 0.0, 1.0], [1.0, 0.0, 0.0]])


def test_load_mini_arm_fixture(mini_arm_path):
    """Test loading a fuller fixture with links, limits and a transmission."""
    robot = load_urdf(mini_arm_path)

    # The transmission's <joint> reference has no parent/child and is dropped
    assert robot.joint_names == ("joint1", "joint2", "tool_joint", "camera_joint")
    assert robot.joint_types == ("revolute", "prismatic", "fixed", "continuous")

    camera = robot.joint("camera_joint")
    np.testing.assert_allclose(camera.axis, [0.0, 1.0, 0.0])
    np.testing.assert_allclose(camera.origin.translation, [0.0, 0.0, 0.1])
    np.testing.assert_allclose(camera.origin.rotation, [0.0, 0.0, 0.0, 1.0])

    tool = robot.joint("tool_joint")
    s = np.sqrt(0.5)
    np.testing.assert_allclose(tool.origin.rotation, [0.0, 0.0, s, s], atol=1e-12)
    # No <axis> element: default x axis
    np.testing.assert_allclose(tool.axis, [1.0, 0.0, 0.0])


def test_model_lookups(mini_arm_path):
    robot = load_urdf(mini_arm_path)

    assert robot.joint_index() == {"joint1": 0, "joint2": 1, "tool_joint": 2, "camera_joint": 3}
    assert robot.link_parent() == {
        "link1": "base_link",
        "link2": "link1",
        "tool0": "link2",
        "camera_link": "link1",
    }

    by_parent = robot.joints_by_parent_link()
    assert [j.name for j in by_parent["link1"]] == ["joint2", "camera_joint"]
    assert [j.name for j in by_parent["base_link"]] == ["joint1"]
    assert set(robot.joints_by_name()) == set(robot.joint_names)

    with pytest.raises(KeyError):
        robot.joint("nonexistent_joint")


def test_axis_is_normalized():
    robot = parse_urdf(_joint(LINKS + '<axis xyz="2 0 0"/>'))
    np.testing.assert_allclose(robot.axes[0], [1.0, 0.0, 0.0])

    robot = parse_urdf(_joint(LINKS + '<axis xyz="0 3 4"/>'))
    np.testing.assert_allclose(robot.axes[0], [0.0, 0.6, 0.8])
    np.testing.assert_allclose(jnp.linalg.norm(robot.axes[0]), 1.0)


def test_zero_axis_does_not_produce_nan():
    robot = parse_urdf(_joint(LINKS + '<axis xyz="0 0 0"/>'))
    assert jnp.isfinite(robot.axes).all()
    np.testing.assert_allclose(robot.axes[0], [0.0, 0.0, 0.0])


def test_defaults_without_origin_or_axis():
    robot = parse_urdf(_joint(LINKS))
    np.testing.assert_allclose(robot.origins.translation[0], [0.0, 0.0, 0.0])
    np.testing.assert_allclose(robot.origins.rotation[0], [0.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(robot.axes[0], [1.0, 0.0, 0.0])


def test_origin_rpy():
    robot = parse_urdf(_joint(LINKS + '<origin xyz="0.1 0.2 0.3" rpy="3.141592653589793 0 0"/>'))
    np.testing.assert_allclose(robot.origins.translation[0], [0.1, 0.2, 0.3])
    np.testing.assert_allclose(robot.origins.rotation[0], [1.0, 0.0, 0.0, 0.0], atol=1e-12)


def test_unparsable_tokens_default_to_zero():
    robot = parse_urdf(_joint(LINKS + '<origin xyz="1 abc 3" rpy="nan 0"/>'))
    np.testing.assert_allclose(robot.origins.translation[0], [1.0, 0.0, 3.0])
    np.testing.assert_allclose(robot.origins.rotation[0], [0.0, 0.0, 0.0, 1.0])


def test_origin_as_opening_tag():
    robot = parse_urdf(_joint(LINKS + '<origin xyz="0 0 2"></origin>'))
    np.testing.assert_allclose(robot.origins.translation[0], [0.0, 0.0, 2.0])


@pytest.mark.parametrize("attrs", ['name="j"', 'name="j" type="floating"', 'name="j" type=""'])
def test_missing_or_unknown_type_becomes_fixed(attrs):
    robot = parse_urdf(_joint(LINKS, attrs))
    assert robot.joint_types == ("fixed",)


def test_type_and_names_are_trimmed():
    robot = parse_urdf(_joint('<parent link=" a "/><child link="b "/>', 'name=" j " type=" prismatic "'))
    assert robot.joint_names == ("j",)
    assert robot.joint_types == ("prismatic",)
    assert robot.parent_links == ("a",)
    assert robot.child_links == ("b",)


@pytest.mark.parametrize(
    "block",
    [
        _joint('<child link="b"/>'),
        _joint('<parent link="a"/>'),
        _joint(LINKS, 'type="revolute"'),
        _joint('<parent link="a"></parent><child link="b"/>'),
        _joint('<parent/><child link="b"/>'),
    ],
)
def test_incomplete_joint_is_dropped(block):
    assert parse_joint_block(block) is None
    assert len(parse_urdf(block)) == 0


def test_malformed_joint_does_not_affect_others(mini_urdf):
    text = mini_urdf.replace("</robot>", _joint('<child link="x"/>', 'name="broken"') + "</robot>")
    robot = parse_urdf(text)
    assert robot.joint_names == ("joint1", "joint2")


def test_duplicate_names_last_wins_first_position():
    text = (
        _joint('<parent link="a"/><child link="b"/>', 'name="j1" type="revolute"')
        + _joint('<parent link="b"/><child link="c"/>', 'name="j2" type="fixed"')
        + _joint('<parent link="x"/><child link="y"/>', 'name="j1" type="prismatic"')
    )
    robot = parse_urdf(text)
    assert robot.joint_names == ("j1", "j2")
    assert robot.joint_types == ("prismatic", "fixed")
    assert robot.parent_links == ("x", "b")


def test_extract_joint_blocks_in_order():
    text = "<robot>" + _joint(LINKS, 'name="first"') + "<joint_state/>" + _joint(LINKS, 'name="second"') + "</robot>"
    blocks = extract_joint_blocks(text)
    assert len(blocks) == 2
    assert 'name="first"' in blocks[0]
    assert 'name="second"' in blocks[1]


def test_single_quoted_and_entity_attributes():
    robot = parse_urdf("<joint name='a&amp;b' type='continuous'><parent link='p'/><child link='c'/></joint>")
    assert robot.joint_names == ("a&b",)
    assert robot.joint_types == ("continuous",)


@pytest.mark.parametrize(
    "name",
    ["arm & base", "a&b", "j&nbsp;1", "x < y", "&"],
)
def test_stray_markup_in_joint_name_is_kept(name):
    robot = parse_urdf(_joint(LINKS, f'name="{name}" type="revolute"'))
    assert robot.joint_names == (name,)
    assert robot.joint_types == ("revolute",)


def test_stray_ampersand_in_link_names_is_kept():
    robot = parse_urdf(_joint('<parent link="base & co"/><child link="arm&1"/>'))
    assert robot.parent_links == ("base & co",)
    assert robot.child_links == ("arm&1",)
    assert robot.link_parent() == {"arm&1": "base & co"}


def test_duplicate_attribute_last_wins():
    robot = parse_urdf(_joint(LINKS, 'name="x" type="fixed" name="y" type="prismatic"'))
    assert robot.joint_names == ("y",)
    assert robot.joint_types == ("prismatic",)


def test_empty_description():
    for text in ("", "<robot name='empty'/>", "not xml at all"):
        robot = parse_urdf(text)
        assert len(robot) == 0
        assert robot.origins.rotation.shape == (0, 4)
        assert robot.axes.shape == (0, 3)


def test_non_string_input_raises():
    with pytest.raises(TypeError):
        parse_urdf(b"<joint/>")


def test_robot_model_is_pytree(mini_urdf):
    """Test that RobotModel is a valid JAX PyTree."""
    robot = parse_urdf(mini_urdf)

    flat_robot, tree_def = jax.tree_util.tree_flatten(robot)
    reconstructed_robot = jax.tree_util.tree_unflatten(tree_def, flat_robot)

    assert reconstructed_robot.joint_names == robot.joint_names
    assert reconstructed_robot.parent_links == robot.parent_links
    np.testing.assert_array_equal(reconstructed_robot.type_codes, robot.type_codes)
    np.testing.assert_array_equal(reconstructed_robot.origins.translation, robot.origins.translation)
    np.testing.assert_array_equal(reconstructed_robot.axes, robot.axes)
