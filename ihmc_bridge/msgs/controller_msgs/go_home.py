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

"""GoHomeMessage: move one body part back to its home posture."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class GoHomeMessage:
    HUMANOID_BODY_PART_ARM: ClassVar[int] = 0
    HUMANOID_BODY_PART_CHEST: ClassVar[int] = 1
    HUMANOID_BODY_PART_PELVIS: ClassVar[int] = 2
    ROBOT_SIDE_LEFT: ClassVar[int] = 0
    ROBOT_SIDE_RIGHT: ClassVar[int] = 1

    sequence_id: int = 0
    humanoid_body_part: int = HUMANOID_BODY_PART_ARM
    # Only meaningful for arms
    robot_side: int = ROBOT_SIDE_LEFT
    trajectory_time: float = 0.0
