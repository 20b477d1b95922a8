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

from ihmc_bridge.config import BridgeConfig
from ihmc_bridge.msgs.geometry_msgs import Pose
from ihmc_bridge.robot.valkyrie import JOINT_NAMES
from ihmc_bridge.transport.pubsub import Memory

_seen_threads = set()
_seen_threads_lock = threading.RLock()


@pytest.fixture(autouse=True)
def monitor_threads(request):
    yield

    threads = [t for t in threading.enumerate() if t.name != "MainThread"]

    if not threads:
        return

    with _seen_threads_lock:
        new_leaks = [t for t in threads if t.ident not in _seen_threads]
        for t in threads:
            _seen_threads.add(t.ident)

    if not new_leaks:
        return

    thread_names = [t.name for t in new_leaks]

    pytest.fail(
        f"Non-closed threads before or during this test. The thread names: {thread_names}. "
        "Please look at the first test that fails and fix that."
    )


@pytest.fixture
def bus():
    return Memory()


@pytest.fixture
def streaming_config():
    return BridgeConfig(commands_from_controllers=True)


@pytest.fixture
def one_shot_config():
    return BridgeConfig(commands_from_controllers=False, one_shot_settle_time=0.0)


@pytest.fixture
def root_pose():
    return Pose.from_components([1.0, 2.0, 3.0], [0.0, 0.0, 0.0, 1.0])


@pytest.fixture
def joint_positions():
    """Every joint set to a distinct value: 0.01, 0.02, ... in model order."""
    return {name: round(0.01 * (i + 1), 2) for i, name in enumerate(JOINT_NAMES)}


_INERTIAL = """
    <inertial>
      <mass value="1.0"/>
      <inertia ixx="0.01" ixy="0" ixz="0" iyy="0.01" iyz="0" izz="0.01"/>
    </inertial>
"""

# Pelvis and the three torso joints of the Valkyrie tree
TORSO_URDF = f"""<?xml version="1.0"?>
<robot name="valkyrie_torso">
  <link name="pelvis">{_INERTIAL}</link>
  <link name="torsoYawLink">{_INERTIAL}</link>
  <link name="torsoPitchLink">{_INERTIAL}</link>
  <link name="torso">{_INERTIAL}</link>
  <joint name="torsoYaw" type="revolute">
    <parent link="pelvis"/>
    <child link="torsoYawLink"/>
    <origin xyz="0 0 0.1" rpy="0 0 0"/>
    <axis xyz="0 0 1"/>
    <limit lower="-3.14" upper="3.14" effort="100" velocity="1"/>
  </joint>
  <joint name="torsoPitch" type="revolute">
    <parent link="torsoYawLink"/>
    <child link="torsoPitchLink"/>
    <origin xyz="0 0 0" rpy="0 0 0"/>
    <axis xyz="0 1 0"/>
    <limit lower="-3.14" upper="3.14" effort="100" velocity="1"/>
  </joint>
  <joint name="torsoRoll" type="revolute">
    <parent link="torsoPitchLink"/>
    <child link="torso"/>
    <origin xyz="0 0 0" rpy="0 0 0"/>
    <axis xyz="1 0 0"/>
    <limit lower="-3.14" upper="3.14" effort="100" velocity="1"/>
  </joint>
</robot>
"""


@pytest.fixture
def torso_urdf():
    return TORSO_URDF


@pytest.fixture
def torso_urdf_path(tmp_path):
    path = tmp_path / "torso.urdf"
    path.write_text(TORSO_URDF)
    return path
