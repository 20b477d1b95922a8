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

"""Shared IHMC controller message parts: queueing, frames, selection and weights."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Final


class ExecutionMode(IntEnum):
    OVERRIDE = 0
    QUEUE = 1
    STREAM = 2


class RobotSide(IntEnum):
    LEFT = 0
    RIGHT = 1


# Reference frame hash ids understood by the controller
WORLD_FRAME_ID: Final = 83766130
PELVIS_ZUP_FRAME_ID: Final = -101
NO_FRAME_ID: Final = 0


@dataclass
class QueueableMessage:
    sequence_id: int = 0
    execution_mode: ExecutionMode = ExecutionMode.OVERRIDE
    message_id: int = -1
    previous_message_id: int = 0
    stream_integration_duration: float = 0.0
    # Wall-clock creation time, nanoseconds since the epoch
    timestamp: int = 0


@dataclass
class FrameInformation:
    sequence_id: int = 0
    trajectory_reference_frame_id: int = WORLD_FRAME_ID
    data_reference_frame_id: int = WORLD_FRAME_ID


@dataclass
class SelectionMatrix3DMessage:
    sequence_id: int = 0
    selection_frame_id: int = NO_FRAME_ID
    x_selected: bool = True
    y_selected: bool = True
    z_selected: bool = True


@dataclass
class WeightMatrix3DMessage:
    sequence_id: int = 0
    weight_frame_id: int = NO_FRAME_ID
    x_weight: float = -1.0
    y_weight: float = -1.0
    z_weight: float = -1.0
