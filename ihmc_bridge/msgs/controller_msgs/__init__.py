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

"""Dataclass mirrors of the IHMC ``controller_msgs`` used by the bridge."""

from ihmc_bridge.msgs.controller_msgs.body import (
    ArmTrajectoryMessage,
    ChestTrajectoryMessage,
    NeckTrajectoryMessage,
    PelvisTrajectoryMessage,
    WholeBodyTrajectoryMessage,
)
from ihmc_bridge.msgs.controller_msgs.common import (
    NO_FRAME_ID,
    PELVIS_ZUP_FRAME_ID,
    WORLD_FRAME_ID,
    ExecutionMode,
    FrameInformation,
    QueueableMessage,
    RobotSide,
    SelectionMatrix3DMessage,
    WeightMatrix3DMessage,
)
from ihmc_bridge.msgs.controller_msgs.go_home import GoHomeMessage
from ihmc_bridge.msgs.controller_msgs.trajectories import (
    JointspaceTrajectoryMessage,
    OneDoFJointTrajectoryMessage,
    SE3TrajectoryMessage,
    SE3TrajectoryPointMessage,
    SO3TrajectoryMessage,
    SO3TrajectoryPointMessage,
    TrajectoryPoint1DMessage,
)

__all__ = [
    "NO_FRAME_ID",
    "PELVIS_ZUP_FRAME_ID",
    "WORLD_FRAME_ID",
    "ArmTrajectoryMessage",
    "ChestTrajectoryMessage",
    "ExecutionMode",
    "FrameInformation",
    "GoHomeMessage",
    "JointspaceTrajectoryMessage",
    "NeckTrajectoryMessage",
    "OneDoFJointTrajectoryMessage",
    "PelvisTrajectoryMessage",
    "QueueableMessage",
    "RobotSide",
    "SE3TrajectoryMessage",
    "SE3TrajectoryPointMessage",
    "SO3TrajectoryMessage",
    "SO3TrajectoryPointMessage",
    "SelectionMatrix3DMessage",
    "TrajectoryPoint1DMessage",
    "WeightMatrix3DMessage",
    "WholeBodyTrajectoryMessage",
]
