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

"""Defaults applied to every field of an outgoing IHMC controller message."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from ihmc_bridge.msgs.controller_msgs import (
    NO_FRAME_ID,
    PELVIS_ZUP_FRAME_ID,
    WORLD_FRAME_ID,
    ExecutionMode,
)
from ihmc_bridge.robot.valkyrie import DEFAULT_CONTROLLED_LINKS

DEFAULT_STREAM_INTEGRATION_DURATION = 0.13
DEFAULT_GO_HOME_TRAJECTORY_TIME = 2.0
ONE_SHOT_TRAJECTORY_TIME = 1.0


@dataclass(frozen=True)
class QueueableParams:
    execution_mode: ExecutionMode = ExecutionMode.OVERRIDE
    message_id: int = 1
    # Only sent in QUEUE mode
    previous_message_id: int = 0
    # Only sent in STREAM mode
    stream_integration_duration: float = 0.0


@dataclass(frozen=True)
class TrajectoryPointParams:
    time: float = ONE_SHOT_TRAJECTORY_TIME


@dataclass(frozen=True)
class FrameParams:
    trajectory_reference_frame_id_world: int = WORLD_FRAME_ID
    trajectory_reference_frame_id_pelviszup: int = PELVIS_ZUP_FRAME_ID
    data_reference_frame_id_world: int = WORLD_FRAME_ID


@dataclass(frozen=True)
class SelectionMatrixParams:
    selection_frame_id: int = NO_FRAME_ID
    x_selected: bool = True
    y_selected: bool = True
    z_selected: bool = True


@dataclass(frozen=True)
class WeightMatrixParams:
    weight_frame_id: int = NO_FRAME_ID
    # Negative weights select the controller's own default
    x_weight: float = -1.0
    y_weight: float = -1.0
    z_weight: float = -1.0


@dataclass(frozen=True)
class ArmParams:
    force_execution: bool = False


@dataclass(frozen=True)
class PelvisParams:
    force_execution: bool = False
    enable_user_pelvis_control: bool = True
    enable_user_pelvis_control_during_walking: bool = False


@dataclass(frozen=True)
class SE3SO3Params:
    use_custom_control_frame: bool = False


@dataclass(frozen=True)
class OneDoFJointParams:
    weight: float = -1.0


@dataclass(frozen=True)
class GoHomeParams:
    trajectory_time: float = DEFAULT_GO_HOME_TRAJECTORY_TIME


@dataclass(frozen=True)
class MessageParameters:
    """Grouped message defaults.

    Use ``one_shot()`` for a single override command and ``streaming()`` for
    commands sent repeatedly at the controller rate.
    """

    sequence_id: int = 1
    queueable: QueueableParams = field(default_factory=QueueableParams)
    traj_point: TrajectoryPointParams = field(default_factory=TrajectoryPointParams)
    frames: FrameParams = field(default_factory=FrameParams)
    selection_matrix: SelectionMatrixParams = field(default_factory=SelectionMatrixParams)
    weight_matrix: WeightMatrixParams = field(default_factory=WeightMatrixParams)
    arm: ArmParams = field(default_factory=ArmParams)
    pelvis: PelvisParams = field(default_factory=PelvisParams)
    se3so3: SE3SO3Params = field(default_factory=SE3SO3Params)
    onedof_joint: OneDoFJointParams = field(default_factory=OneDoFJointParams)
    go_home: GoHomeParams = field(default_factory=GoHomeParams)
    controlled_links: frozenset[int] = DEFAULT_CONTROLLED_LINKS

    @classmethod
    def one_shot(cls, **kwargs: Any) -> MessageParameters:
        return cls(
            queueable=QueueableParams(execution_mode=ExecutionMode.OVERRIDE),
            traj_point=TrajectoryPointParams(time=ONE_SHOT_TRAJECTORY_TIME),
            **kwargs,
        )

    @classmethod
    def streaming(
        cls, integration_duration: float = DEFAULT_STREAM_INTEGRATION_DURATION, **kwargs: Any
    ) -> MessageParameters:
        """Streaming defaults.

        Args:
            integration_duration: How long the controller extrapolates each
                streamed point. Should be slightly longer than the send period.
        """
        return cls(
            queueable=QueueableParams(
                execution_mode=ExecutionMode.STREAM,
                stream_integration_duration=integration_duration,
            ),
            traj_point=TrajectoryPointParams(time=0.0),
            **kwargs,
        )

    def with_links(self, links: Iterable[int]) -> MessageParameters:
        return replace(self, controlled_links=frozenset(int(link) for link in links))

    def with_go_home_time(self, trajectory_time: float) -> MessageParameters:
        return replace(self, go_home=GoHomeParams(trajectory_time=trajectory_time))


__all__ = [
    "DEFAULT_GO_HOME_TRAJECTORY_TIME",
    "DEFAULT_STREAM_INTEGRATION_DURATION",
    "ONE_SHOT_TRAJECTORY_TIME",
    "ArmParams",
    "FrameParams",
    "GoHomeParams",
    "MessageParameters",
    "OneDoFJointParams",
    "PelvisParams",
    "QueueableParams",
    "SE3SO3Params",
    "SelectionMatrixParams",
    "TrajectoryPointParams",
    "WeightMatrixParams",
]
