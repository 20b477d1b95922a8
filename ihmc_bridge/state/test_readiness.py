# Copyright 2025-2026 Dimensional Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from itertools import permutations

import pytest

from ihmc_bridge.errors import NotReadyError
from ihmc_bridge.msgs.geometry_msgs import Pose
from ihmc_bridge.robot.valkyrie import DEFAULT_CONTROLLED_LINKS, ValkyrieLink
from ihmc_bridge.state.readiness import ReadinessAggregator, ReadinessState


def _listening():
    agg = ReadinessAggregator()
    agg.start_listening()
    return agg


def _deliver(agg, kind, pose, joints):
    match kind:
        case "pose":
            agg.on_pose_update(pose)
        case "joints":
            agg.on_joint_update(joints.items())
        case "links":
            agg.on_link_set_update([ValkyrieLink.LEFT_PALM])


# =============================================================================
# ReadinessState
# =============================================================================


class TestReadinessState:
    def test_can_publish_needs_all_three(self):
        state = ReadinessState(received_pose=True, received_joints=True)
        assert not state.can_publish
        state.received_links = True
        assert state.can_publish

    @pytest.mark.parametrize("accepting_links", [False, True])
    def test_should_stop_ignores_links(self, accepting_links):
        state = ReadinessState(accepting_links=accepting_links)
        assert state.should_stop
        state.accepting_pose = True
        assert not state.should_stop
        state.accepting_pose = False
        state.accepting_joints = True
        assert not state.should_stop


# =============================================================================
# Streaming
# =============================================================================


class TestStreaming:
    def test_initially_idle(self):
        agg = ReadinessAggregator()
        assert agg.has_link_supplier
        assert not agg.state.accepting_pose
        assert not agg.state.accepting_joints
        assert not agg.state.accepting_links
        assert not agg.can_publish()
        assert agg.controlled_links == frozenset()

    def test_updates_ignored_before_start(self, root_pose, joint_positions):
        agg = ReadinessAggregator()
        agg.on_pose_update(root_pose)
        agg.on_joint_update(joint_positions.items())
        agg.on_link_set_update([1, 2])
        assert not agg.state.received_pose
        assert not agg.state.received_joints
        assert not agg.state.received_links

    @pytest.mark.parametrize("order", list(permutations(["pose", "joints", "links"])))
    def test_ready_only_after_all_three(self, order, root_pose, joint_positions):
        agg = _listening()
        for i, kind in enumerate(order):
            assert not agg.can_publish()
            _deliver(agg, kind, root_pose, joint_positions)
            assert agg.can_publish() == (i == len(order) - 1)

    def test_keeps_accepting_after_update(self, root_pose):
        agg = _listening()
        agg.on_pose_update(root_pose)
        agg.on_pose_update(Pose.from_components([4, 5, 6], [0, 0, 0, 1]))
        assert agg.state.accepting_pose
        assert agg.pose.position.to_list() == [4.0, 5.0, 6.0]

    def test_link_set_replaced(self):
        agg = _listening()
        agg.on_link_set_update([ValkyrieLink.HEAD, ValkyrieLink.TORSO])
        agg.on_link_set_update([ValkyrieLink.PELVIS])
        assert agg.controlled_links == {ValkyrieLink.PELVIS}

    def test_stop_listening_mid_aggregation(self, root_pose):
        agg = _listening()
        agg.on_pose_update(root_pose)
        assert not agg.should_stop()

        agg.stop_listening()

        state = agg.state
        assert not (state.received_pose or state.received_joints or state.received_links)
        assert not (state.accepting_pose or state.accepting_joints or state.accepting_links)
        assert agg.should_stop()
        assert not agg.can_publish()

    def test_restart_clears_received(self, root_pose, joint_positions):
        agg = _listening()
        for kind in ("pose", "joints", "links"):
            _deliver(agg, kind, root_pose, joint_positions)
        assert agg.can_publish()
        agg.start_listening()
        assert not agg.can_publish()

    def test_without_link_supplier_links_count_as_received(self, root_pose, joint_positions):
        agg = ReadinessAggregator(one_shot=False, has_link_supplier=False)
        agg.start_listening()
        assert not agg.state.accepting_links
        agg.on_pose_update(root_pose)
        agg.on_joint_update(joint_positions.items())
        assert agg.can_publish()
        assert agg.controlled_links == DEFAULT_CONTROLLED_LINKS


# =============================================================================
# Joint updates
# =============================================================================


class TestJointUpdates:
    def test_unknown_name_leaves_other_joints(self, root_pose, joint_positions):
        agg = _listening()
        agg.on_pose_update(root_pose)
        agg.on_link_set_update([])
        agg.on_joint_update(joint_positions.items())
        before = agg.configuration().joints

        agg.on_joint_update([*joint_positions.items(), ("leftWristRoll", 1.5)])

        assert agg.configuration().joints.tolist() == before.tolist()

    def test_unlisted_joints_reset_to_zero(self, root_pose):
        agg = _listening()
        agg.on_pose_update(root_pose)
        agg.on_link_set_update([])
        agg.on_joint_update([("neckYaw", 0.5), ("torsoYaw", 0.2)])
        agg.on_joint_update([("neckYaw", 0.7)])
        config = agg.configuration()
        assert config.joint("neckYaw") == pytest.approx(0.7)
        assert config.joint("torsoYaw") == 0.0

    def test_order_independent(self, root_pose):
        agg = _listening()
        agg.on_pose_update(root_pose)
        agg.on_link_set_update([])
        agg.on_joint_update([("upperNeckPitch", 0.3), ("leftHipYaw", -0.1)])
        config = agg.configuration()
        assert config.joint("upperNeckPitch") == pytest.approx(0.3)
        assert config.joint("leftHipYaw") == pytest.approx(-0.1)


# =============================================================================
# One-shot
# =============================================================================


class TestOneShot:
    def test_initial_state(self):
        agg = ReadinessAggregator(one_shot=True)
        assert not agg.has_link_supplier
        assert agg.state.accepting_pose
        assert agg.state.accepting_joints
        assert not agg.state.accepting_links
        assert agg.state.received_links
        assert agg.controlled_links == DEFAULT_CONTROLLED_LINKS

    def test_keeps_first_update_only(self, root_pose):
        agg = ReadinessAggregator(one_shot=True)
        agg.on_pose_update(root_pose)
        agg.on_pose_update(Pose.from_components([9, 9, 9], [0, 0, 0, 1]))
        assert agg.pose.position.to_list() == [1.0, 2.0, 3.0]
        assert not agg.state.accepting_pose

    def test_link_set_never_changes(self, root_pose, joint_positions):
        agg = ReadinessAggregator(one_shot=True)
        agg.on_link_set_update([ValkyrieLink.HEAD])
        agg.on_pose_update(root_pose)
        agg.on_link_set_update([])
        agg.on_joint_update(joint_positions.items())
        agg.on_link_set_update([ValkyrieLink.PELVIS])
        assert agg.controlled_links == DEFAULT_CONTROLLED_LINKS

    def test_ready_and_stopping_after_pose_and_joints(self, root_pose, joint_positions):
        agg = ReadinessAggregator(one_shot=True)
        agg.on_pose_update(root_pose)
        assert not agg.can_publish()
        assert not agg.should_stop()
        agg.on_joint_update(joint_positions.items())
        assert agg.can_publish()
        assert agg.should_stop()

    def test_with_link_supplier_keeps_first_link_set(self, root_pose, joint_positions):
        agg = ReadinessAggregator(one_shot=True, has_link_supplier=True)
        assert agg.state.accepting_links
        assert not agg.state.received_links

        agg.on_pose_update(root_pose)
        agg.on_joint_update(joint_positions.items())
        assert not agg.can_publish()

        agg.on_link_set_update([ValkyrieLink.PELVIS, ValkyrieLink.LEFT_PALM])
        agg.on_link_set_update([ValkyrieLink.HEAD])
        assert agg.controlled_links == {ValkyrieLink.PELVIS, ValkyrieLink.LEFT_PALM}
        assert not agg.state.accepting_links
        assert agg.can_publish()
        assert agg.should_stop()


# =============================================================================
# Non-finite inputs
# =============================================================================


def test_non_finite_pose_is_ignored(root_pose):
    agg = _listening()
    agg.on_pose_update(Pose.from_components([float("nan"), 0, 0], [0, 0, 0, 1]))
    assert not agg.state.received_pose

    agg.on_pose_update(root_pose)
    assert agg.state.received_pose
    assert agg.pose.position.to_list() == [1.0, 2.0, 3.0]


def test_non_finite_joint_command_is_ignored(root_pose, joint_positions):
    agg = _listening()
    agg.on_pose_update(root_pose)
    agg.on_link_set_update([ValkyrieLink.LEFT_PALM])
    agg.on_joint_update([("leftElbowPitch", float("inf"))])
    assert not agg.state.received_joints
    assert not agg.can_publish()

    agg.on_joint_update(joint_positions.items())
    assert agg.can_publish()


def test_non_finite_update_keeps_one_shot_accepting(joint_positions):
    agg = ReadinessAggregator(one_shot=True)
    agg.on_joint_update([("neckYaw", float("nan"))])
    assert agg.state.accepting_joints
    agg.on_joint_update(joint_positions.items())
    assert not agg.state.accepting_joints


# =============================================================================
# Configuration
# =============================================================================


def test_configuration_before_ready_raises(root_pose):
    agg = _listening()
    agg.on_pose_update(root_pose)
    with pytest.raises(NotReadyError, match="joints, links"):
        agg.configuration()


def test_pose_is_copied(root_pose, joint_positions):
    agg = ReadinessAggregator(one_shot=True)
    agg.on_pose_update(root_pose)
    agg.on_joint_update(joint_positions.items())
    root_pose.position.x = 100.0
    assert agg.configuration().root_pose.position.x == 1.0


def test_is_waiting():
    agg = ReadinessAggregator()
    assert not agg.is_waiting()
    agg.start_listening()
    assert agg.is_waiting()
