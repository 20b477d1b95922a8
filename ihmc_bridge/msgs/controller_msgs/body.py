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

"""Per-body-part trajectory messages and the whole-body container."""

from __future__ import annotations

from dataclasses import dataclass, field

from ihmc_bridge.msgs.controller_msgs.common import RobotSide
from ihmc_bridge.msgs.controller_msgs.trajectories import (
    JointspaceTrajectoryMessage,
    SE3TrajectoryMessage,
    SO3TrajectoryMessage,
)


@dataclass
class ArmTrajectoryMessage:
    sequence_id: int = 0
    force_execution: bool = False
    robot_side: RobotSide = RobotSide.LEFT
    jointspace_trajectory: JointspaceTrajectoryMessage = field(
        default_factory=JointspaceTrajectoryMessage
    )


@dataclass
class ChestTrajectoryMessage:
    sequence_id: int = 0
    so3_trajectory: SO3TrajectoryMessage = field(default_factory=SO3TrajectoryMessage)


@dataclass
class PelvisTrajectoryMessage:
    sequence_id: int = 0
    force_execution: bool = False
    enable_user_pelvis_control: bool = False
    enable_user_pelvis_control_during_walking: bool = False
    se3_trajectory: SE3TrajectoryMessage = field(default_factory=SE3TrajectoryMessage)


@dataclass
class NeckTrajectoryMessage:
    sequence_id: int = 0
    jointspace_trajectory: JointspaceTrajectoryMessage = field(
        default_factory=JointspaceTrajectoryMessage
    )


@dataclass
class WholeBodyTrajectoryMessage:
    """Whole-body command. Body parts that are not commanded stay ``None``.

    Feet and spine have no slot here: foot trajectories fight the balance
    controller while standing, and spine trajectories only behave in
    simulation.
    """

    sequence_id: int = 0
    left_arm_trajectory_message: ArmTrajectoryMessage | None = None
    right_arm_trajectory_message: ArmTrajectoryMessage | None = None
    chest_trajectory_message: ChestTrajectoryMessage | None = None
    pelvis_trajectory_message: PelvisTrajectoryMessage | None = None
    neck_trajectory_message: NeckTrajectoryMessage | None = None

    def commanded_parts(self) -> list[str]:
        """Names of the populated sub-messages, in field order."""
        parts = {
            "left_arm": self.left_arm_trajectory_message,
            "right_arm": self.right_arm_trajectory_message,
            "chest": self.chest_trajectory_message,
            "pelvis": self.pelvis_trajectory_message,
            "neck": self.neck_trajectory_message,
        }
        return [name for name, msg in parts.items() if msg is not None]
