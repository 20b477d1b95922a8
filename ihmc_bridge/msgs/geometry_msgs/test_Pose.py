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

from ihmc_bridge.msgs.geometry_msgs import Pose, Quaternion, Vector3


def test_pose_default_is_origin_identity():
    pose = Pose()
    assert pose.to_list() == [0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0]


def test_pose_zero_has_zero_quaternion():
    assert Pose.zero().to_list() == [0.0] * 7


def test_pose_from_components():
    pose = Pose.from_components([1, 2, 3], [0, 0, 1, 0])
    assert (pose.x, pose.y, pose.z) == (1.0, 2.0, 3.0)
    assert pose.orientation == Quaternion(0, 0, 1, 0)


def test_pose_components_are_independent():
    position = Vector3(1, 2, 3)
    pose = Pose.from_components(position.to_list(), [0, 0, 0, 1])
    position.x = 9.0
    assert pose.x == 1.0
