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

"""Robot model tables."""

from ihmc_bridge.robot.valkyrie import (
    ABSENT,
    DEFAULT_CONTROLLED_LINKS,
    JOINT_INDICES,
    JOINT_NAME_TO_INDEX,
    JOINT_NAMES,
    NUM_ACT_JOINT,
    NUM_Q,
    NUM_VIRTUAL,
    BodyPart,
    ValkyrieLink,
    joint_index,
)

__all__ = [
    "ABSENT",
    "DEFAULT_CONTROLLED_LINKS",
    "JOINT_INDICES",
    "JOINT_NAMES",
    "JOINT_NAME_TO_INDEX",
    "NUM_ACT_JOINT",
    "NUM_Q",
    "NUM_VIRTUAL",
    "BodyPart",
    "ValkyrieLink",
    "joint_index",
]
