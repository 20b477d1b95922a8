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

import threading

import pytest

from ihmc_bridge.bridge import IHMCBridge
from ihmc_bridge.config import BridgeConfig
from ihmc_bridge.errors import ConfigurationError, NotReadyError, NothingPendingError
from ihmc_bridge.msgs.controller_msgs import ExecutionMode, GoHomeMessage
from ihmc_bridge.msgs.sensor_msgs import JointState
from ihmc_bridge.robot.valkyrie import ValkyrieLink


class Recorder:
    """Collects everything the bridge publishes, per output topic."""

    def __init__(self, bus, config):
        self.whole_body = []
        self.go_home = []
        bus.subscribe(config.whole_body_topic, lambda msg, topic: self.whole_body.append(msg))
        bus.subscribe(config.go_home_topic, lambda msg, topic: self.go_home.append(msg))


@pytest.fixture
def streaming(bus, streaming_config):
    bridge = IHMCBridge(bus, streaming_config)
    bridge.start()
    yield bridge
    bridge.stop()


def _send(bus, bridge, kind, msg):
    bus.publish(bridge.config.input_topics[kind], msg)


def _send_all(bus, bridge, root_pose, joint_positions, links=(ValkyrieLink.LEFT_PALM,)):
    _send(bus, bridge, "pose", root_pose)
    _send(bus, bridge, "joints", JointState.from_dict(joint_positions))
    _send(bus, bridge, "links", list(links))


# =============================================================================
# Streaming
# =============================================================================


class TestStreaming:
    def test_nothing_before_start_listening(
        self, bus, streaming, streaming_config, root_pose, joint_positions
    ):
        recorder = Recorder(bus, streaming_config)
        _send_all(bus, streaming, root_pose, joint_positions)
        assert streaming.tick()
        assert recorder.whole_body == []

    def test_streams_every_tick_until_stopped(
        self, bus, streaming, streaming_config, root_pose, joint_positions
    ):
        recorder = Recorder(bus, streaming_config)
        _send(bus, streaming, "status", "START-LISTENING")
        _send_all(bus, streaming, root_pose, joint_positions)

        streaming.tick()
        streaming.tick()
        assert len(recorder.whole_body) == 2
        msg = recorder.whole_body[0]
        assert msg.commanded_parts() == ["left_arm"]
        queueing = msg.left_arm_trajectory_message.jointspace_trajectory.queueing_properties
        assert queueing.execution_mode == ExecutionMode.STREAM

        _send(bus, streaming, "status", "STOP-LISTENING")
        assert streaming.tick()
        assert len(recorder.whole_body) == 2
        assert streaming.status == "STOP-LISTENING"

    def test_go_home_published_once(self, bus, streaming, streaming_config):
        recorder = Recorder(bus, streaming_config)
        _send(bus, streaming, "status", "HOME-RIGHTARM")
        _send(bus, streaming, "status", "HOME-PELVIS")

        streaming.tick()
        streaming.tick()

        assert [(m.humanoid_body_part, m.robot_side) for m in recorder.go_home] == [
            (GoHomeMessage.HUMANOID_BODY_PART_ARM, GoHomeMessage.ROBOT_SIDE_RIGHT),
            (GoHomeMessage.HUMANOID_BODY_PART_PELVIS, GoHomeMessage.ROBOT_SIDE_LEFT),
        ]
        assert recorder.whole_body == []

    def test_unrecognized_status_ignored(self, bus, streaming):
        _send(bus, streaming, "status", "START-LISTENING")
        _send(bus, streaming, "status", "bogus")
        assert streaming.status == "START-LISTENING"
        assert streaming.aggregator.state.accepting_pose

    def test_stop_unsubscribes(self, bus, streaming):
        streaming.stop()
        _send(bus, streaming, "status", "START-LISTENING")
        assert streaming.status == ""
        assert bus.topics() == []


# =============================================================================
# Explicit publishing
# =============================================================================


class TestPublish:
    def test_whole_body_before_ready_raises(self, streaming):
        with pytest.raises(NotReadyError):
            streaming.publish_whole_body()

    def test_whole_body_when_ready(
        self, bus, streaming, streaming_config, root_pose, joint_positions
    ):
        recorder = Recorder(bus, streaming_config)
        _send(bus, streaming, "status", "START-LISTENING")
        _send_all(bus, streaming, root_pose, joint_positions, links=[ValkyrieLink.PELVIS])
        msg = streaming.publish_whole_body()
        assert recorder.whole_body == [msg]

    def test_go_home_with_nothing_pending_raises(self, streaming):
        with pytest.raises(NothingPendingError):
            streaming.publish_go_home()

    def test_go_home(self, bus, streaming, streaming_config):
        recorder = Recorder(bus, streaming_config)
        _send(bus, streaming, "status", "HOME-CHEST")
        commands = streaming.publish_go_home()
        assert recorder.go_home == commands
        assert commands[0].trajectory_time == streaming_config.go_home_trajectory_time
        assert not streaming.homing.any()


# =============================================================================
# One-shot
# =============================================================================


class TestOneShot:
    def test_publishes_once_then_done(self, bus, one_shot_config, root_pose, joint_positions):
        recorder = Recorder(bus, one_shot_config)
        bridge = IHMCBridge(bus, one_shot_config)
        bridge.start()

        assert bridge.tick()
        _send(bus, bridge, "pose", root_pose)
        assert bridge.tick()
        _send(bus, bridge, "joints", JointState.from_dict(joint_positions))

        assert not bridge.tick()
        assert bridge.done
        assert not bridge.tick()
        bridge.stop()

        assert len(recorder.whole_body) == 1
        msg = recorder.whole_body[0]
        # No kinematic model: every default part except the chest
        assert msg.commanded_parts() == ["left_arm", "right_arm", "pelvis", "neck"]
        queueing = msg.neck_trajectory_message.jointspace_trajectory.queueing_properties
        assert queueing.execution_mode == ExecutionMode.OVERRIDE

    def test_ignores_status_and_links(self, bus, one_shot_config):
        bridge = IHMCBridge(bus, one_shot_config)
        bridge.start()
        _send(bus, bridge, "status", "STOP-LISTENING")
        _send(bus, bridge, "links", [ValkyrieLink.HEAD])
        assert bridge.status == ""
        assert bridge.aggregator.state.accepting_pose
        bridge.stop()

    def test_run_ends_after_publish(self, bus, root_pose, joint_positions):
        config = BridgeConfig(
            commands_from_controllers=False, one_shot_settle_time=0.0, rate_hz=200.0
        )
        recorder = Recorder(bus, config)
        bridge = IHMCBridge(bus, config)
        bridge.start()
        _send(bus, bridge, "pose", root_pose)
        _send(bus, bridge, "joints", JointState.from_dict(joint_positions))

        bridge.run()

        assert bridge.done
        assert len(recorder.whole_body) == 1


# =============================================================================
# Run loop and stalls
# =============================================================================


def test_run_stops_from_another_thread(bus):
    bridge = IHMCBridge(bus, BridgeConfig(rate_hz=100.0))
    runner = threading.Thread(target=bridge.run, name="bridge_run")
    runner.start()
    bridge.stop()
    runner.join(timeout=2.0)
    assert not runner.is_alive()


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_stall_reported_once(bus, root_pose):
    clock = FakeClock()
    stalls = []
    config = BridgeConfig(input_timeout=1.0)
    bridge = IHMCBridge(bus, config, on_stalled=stalls.append, clock=clock)
    bridge.start()
    _send(bus, bridge, "status", "START-LISTENING")
    _send(bus, bridge, "pose", root_pose)

    bridge.tick()
    clock.now = 0.5
    bridge.tick()
    assert stalls == []

    clock.now = 1.5
    bridge.tick()
    clock.now = 5.0
    bridge.tick()

    assert len(stalls) == 1
    assert stalls[0].received_pose
    assert not stalls[0].received_joints
    bridge.stop()


def test_stall_rearms_after_idle(bus):
    clock = FakeClock()
    stalls = []
    bridge = IHMCBridge(bus, BridgeConfig(input_timeout=1.0), on_stalled=stalls.append, clock=clock)
    bridge.start()

    for _ in range(2):
        _send(bus, bridge, "status", "START-LISTENING")
        bridge.tick()
        clock.now += 2.0
        bridge.tick()
        _send(bus, bridge, "status", "STOP-LISTENING")
        bridge.tick()

    assert len(stalls) == 2
    bridge.stop()


def test_no_timeout_waits_forever(bus):
    clock = FakeClock()
    stalls = []
    bridge = IHMCBridge(bus, BridgeConfig(), on_stalled=stalls.append, clock=clock)
    bridge.start()
    _send(bus, bridge, "status", "START-LISTENING")
    bridge.tick()
    clock.now = 1e6
    bridge.tick()
    assert stalls == []
    bridge.stop()


# =============================================================================
# Bad inputs and kinematic model
# =============================================================================


class RejectingModel:
    def link_orientation(self, config, link):
        raise ConfigurationError("Root quaternion has zero norm")


def test_non_finite_joint_command_keeps_ticking(
    bus, streaming, streaming_config, root_pose, joint_positions
):
    recorder = Recorder(bus, streaming_config)
    _send(bus, streaming, "status", "START-LISTENING")
    _send(bus, streaming, "pose", root_pose)
    _send(bus, streaming, "links", [ValkyrieLink.LEFT_PALM])
    _send(bus, streaming, "joints", JointState(["leftElbowPitch"], [float("nan")]))

    assert streaming.tick()
    assert recorder.whole_body == []

    _send(bus, streaming, "joints", JointState.from_dict(joint_positions))
    assert streaming.tick()
    assert len(recorder.whole_body) == 1


def test_rejected_configuration_skips_tick(bus, streaming_config, root_pose, joint_positions):
    recorder = Recorder(bus, streaming_config)
    bridge = IHMCBridge(bus, streaming_config, kinematic_model=RejectingModel())
    bridge.start()
    _send(bus, bridge, "status", "START-LISTENING")
    _send_all(bus, bridge, root_pose, joint_positions, links=[ValkyrieLink.TORSO])

    assert bridge.tick()
    assert recorder.whole_body == []
    with pytest.raises(ConfigurationError):
        bridge.publish_whole_body()
    bridge.stop()


def test_joint_command_as_pairs(bus, streaming, root_pose):
    _send(bus, streaming, "status", "START-LISTENING")
    _send(bus, streaming, "joints", [("neckYaw", 0.25), ("torsoYaw", -0.5)])
    _send(bus, streaming, "pose", root_pose)
    _send(bus, streaming, "links", [ValkyrieLink.HEAD])

    config = streaming.aggregator.configuration()
    assert config.joint("neckYaw") == 0.25
    assert config.joint("torsoYaw") == -0.5


def test_go_home_time_from_config(bus):
    config = BridgeConfig(go_home_trajectory_time=3.5)
    recorder = Recorder(bus, config)
    bridge = IHMCBridge(bus, config)
    bridge.start()
    _send(bus, bridge, "status", "HOME-LEFTARM")
    bridge.tick()
    assert [m.trajectory_time for m in recorder.go_home] == [3.5]
    bridge.stop()


def test_urdf_path_loads_kinematic_model(bus, torso_urdf_path, root_pose, joint_positions):
    pytest.importorskip("pinocchio")
    from ihmc_bridge.kinematics.pinocchio_model import PinocchioKinematicModel

    config = BridgeConfig(urdf_path=torso_urdf_path)
    recorder = Recorder(bus, config)
    bridge = IHMCBridge(bus, config)
    assert isinstance(bridge.assembler.kinematic_model, PinocchioKinematicModel)

    bridge.start()
    _send(bus, bridge, "status", "START-LISTENING")
    _send_all(bus, bridge, root_pose, joint_positions, links=[ValkyrieLink.TORSO])
    bridge.tick()
    bridge.stop()

    assert recorder.whole_body[0].commanded_parts() == ["chest"]
