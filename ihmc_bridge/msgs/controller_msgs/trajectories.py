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

"""Trajectory messages: jointspace (per joint) and taskspace (SE3 / SO3)."""

from __future__ import annotations

from dataclasses import dataclass, field

from ihmc_bridge.msgs.controller_msgs.common import (
    FrameInformation,
    QueueableMessage,
    SelectionMatrix3DMessage,
    WeightMatrix3DMessage,
)
from ihmc_bridge.msgs.geometry_msgs import Point, Pose, Quaternion, Vector3


@dataclass
class TrajectoryPoint1DMessage:
    sequence_id: int = 0
    time: float = 0.0
    position: float = 0.0
    velocity: float = 0.0


@dataclass
class OneDoFJointTrajectoryMessage:
    sequence_id: int = 0
    weight: float = -1.0
    trajectory_points: list[TrajectoryPoint1DMessage] = field(default_factory=list)


@dataclass
class JointspaceTrajectoryMessage:
    sequence_id: int = 0
    queueing_properties: QueueableMessage = field(default_factory=QueueableMessage)
    joint_trajectory_messages: list[OneDoFJointTrajectoryMessage] = field(default_factory=list)

    @property
    def positions(self) -> list[float]:
        """First trajectory point position of every joint, in joint order."""
        return [j.trajectory_points[0].position for j in self.joint_trajectory_messages]


@dataclass
class SE3TrajectoryPointMessage:
    sequence_id: int = 0
    time: float = 0.0
    position: Point = field(default_factory=Point)
    orientation: Quaternion = field(default_factory=Quaternion)
    linear_velocity: Vector3 = field(default_factory=Vector3)
    angular_velocity: Vector3 = field(default_factory=Vector3)


@dataclass
class SO3TrajectoryPointMessage:
    sequence_id: int = 0
    time: float = 0.0
    orientation: Quaternion = field(default_factory=Quaternion)
    angular_velocity: Vector3 = field(default_factory=Vector3)


@dataclass
class SE3TrajectoryMessage:
    sequence_id: int = 0
    taskspace_trajectory_points: list[SE3TrajectoryPointMessage] = field(default_factory=list)
    frame_information: FrameInformation = field(default_factory=FrameInformation)
    angular_selection_matrix: SelectionMatrix3DMessage = field(
        default_factory=SelectionMatrix3DMessage
    )
    linear_selection_matrix: SelectionMatrix3DMessage = field(
        default_factory=SelectionMatrix3DMessage
    )
    angular_weight_matrix: WeightMatrix3DMessage = field(default_factory=WeightMatrix3DMessage)
    linear_weight_matrix: WeightMatrix3DMessage = field(default_factory=WeightMatrix3DMessage)
    use_custom_control_frame: bool = False
    control_frame_pose: Pose = field(default_factory=Pose.zero)
    queueing_properties: QueueableMessage = field(default_factory=QueueableMessage)


@dataclass
class SO3TrajectoryMessage:
    sequence_id: int = 0
    taskspace_trajectory_points: list[SO3TrajectoryPointMessage] = field(default_factory=list)
    frame_information: FrameInformation = field(default_factory=FrameInformation)
    selection_matrix: SelectionMatrix3DMessage = field(default_factory=SelectionMatrix3DMessage)
    weight_matrix: WeightMatrix3DMessage = field(default_factory=WeightMatrix3DMessage)
    use_custom_control_frame: bool = False
    control_frame_pose: Pose = field(default_factory=Pose.zero)
    queueing_properties: QueueableMessage = field(default_factory=QueueableMessage)
