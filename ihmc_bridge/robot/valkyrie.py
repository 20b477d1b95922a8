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

"""Valkyrie robot model tables.

Configuration layout (length 35)::

    [x, y, z, qx, qy, qz, qw, <28 actuated joints in JOINT_NAMES order>]

Joint-index tables per body part are constant data. ``ABSENT`` marks a
downstream degree of freedom with no source joint in the model; consumers
substitute zero for it (see ``ConfigurationVector.select``).
"""

from __future__ import annotations

from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Final

# Root pose slots
VIRTUAL_X: Final = 0
VIRTUAL_Y: Final = 1
VIRTUAL_Z: Final = 2
VIRTUAL_QX: Final = 3
VIRTUAL_QY: Final = 4
VIRTUAL_QZ: Final = 5
VIRTUAL_QW: Final = 6

NUM_VIRTUAL: Final = 7

JOINT_NAMES: Final[tuple[str, ...]] = (
    # left leg
    "leftHipYaw",
    "leftHipRoll",
    "leftHipPitch",
    "leftKneePitch",
    "leftAnklePitch",
    "leftAnkleRoll",
    # right leg
    "rightHipYaw",
    "rightHipRoll",
    "rightHipPitch",
    "rightKneePitch",
    "rightAnklePitch",
    "rightAnkleRoll",
    # torso
    "torsoYaw",
    "torsoPitch",
    "torsoRoll",
    # left arm
    "leftShoulderPitch",
    "leftShoulderRoll",
    "leftShoulderYaw",
    "leftElbowPitch",
    "leftForearmYaw",
    # neck
    "lowerNeckPitch",
    "neckYaw",
    "upperNeckPitch",
    # right arm
    "rightShoulderPitch",
    "rightShoulderRoll",
    "rightShoulderYaw",
    "rightElbowPitch",
    "rightForearmYaw",
)

NUM_ACT_JOINT: Final = len(JOINT_NAMES)
NUM_Q: Final = NUM_VIRTUAL + NUM_ACT_JOINT

# Joint name -> configuration slot (always >= NUM_VIRTUAL). Unknown names are absent.
JOINT_NAME_TO_INDEX: Final = MappingProxyType(
    {name: NUM_VIRTUAL + i for i, name in enumerate(JOINT_NAMES)}
)

ABSENT: Final = -1


def joint_index(name: str) -> int | None:
    """Configuration slot for a joint name, or None if the model has no such joint."""
    return JOINT_NAME_TO_INDEX.get(name)


_URDF_LINK_NAMES: Final[tuple[str, ...]] = (
    "pelvis",
    "leftHipYawLink",
    "leftHipRollLink",
    "leftHipPitchLink",
    "leftKneePitchLink",
    "leftAnklePitchLink",
    "leftFoot",
    "leftCOP_Frame",
    "rightHipYawLink",
    "rightHipRollLink",
    "rightHipPitchLink",
    "rightKneePitchLink",
    "rightAnklePitchLink",
    "rightFoot",
    "rightCOP_Frame",
    "torsoYawLink",
    "torsoPitchLink",
    "torso",
    "leftShoulderPitchLink",
    "leftShoulderRollLink",
    "leftShoulderYawLink",
    "leftElbowPitchLink",
    "leftForearmLink",
    "leftPalm",
    "lowerNeckPitchLink",
    "neckYawLink",
    "upperNeckPitchLink",
    "head",
    "rightShoulderPitchLink",
    "rightShoulderRollLink",
    "rightShoulderYawLink",
    "rightElbowPitchLink",
    "rightForearmLink",
    "rightPalm",
)


class ValkyrieLink(IntEnum):
    """Link identifiers carried by controlled-link-set updates."""

    PELVIS = 0
    LEFT_HIP_YAW_LINK = 1
    LEFT_HIP_ROLL_LINK = 2
    LEFT_HIP_PITCH_LINK = 3
    LEFT_KNEE_PITCH_LINK = 4
    LEFT_ANKLE_PITCH_LINK = 5
    LEFT_FOOT = 6
    LEFT_COP_FRAME = 7
    RIGHT_HIP_YAW_LINK = 8
    RIGHT_HIP_ROLL_LINK = 9
    RIGHT_HIP_PITCH_LINK = 10
    RIGHT_KNEE_PITCH_LINK = 11
    RIGHT_ANKLE_PITCH_LINK = 12
    RIGHT_FOOT = 13
    RIGHT_COP_FRAME = 14
    TORSO_YAW_LINK = 15
    TORSO_PITCH_LINK = 16
    TORSO = 17
    LEFT_SHOULDER_PITCH_LINK = 18
    LEFT_SHOULDER_ROLL_LINK = 19
    LEFT_SHOULDER_YAW_LINK = 20
    LEFT_ELBOW_PITCH_LINK = 21
    LEFT_FOREARM_LINK = 22
    LEFT_PALM = 23
    LOWER_NECK_PITCH_LINK = 24
    NECK_YAW_LINK = 25
    UPPER_NECK_PITCH_LINK = 26
    HEAD = 27
    RIGHT_SHOULDER_PITCH_LINK = 28
    RIGHT_SHOULDER_ROLL_LINK = 29
    RIGHT_SHOULDER_YAW_LINK = 30
    RIGHT_ELBOW_PITCH_LINK = 31
    RIGHT_FOREARM_LINK = 32
    RIGHT_PALM = 33

    @property
    def urdf_name(self) -> str:
        """Link (frame) name in the Valkyrie URDF."""
        return _URDF_LINK_NAMES[self.value]


# Assumed when no controlled-link supplier exists (one-shot mode)
DEFAULT_CONTROLLED_LINKS: Final = frozenset(
    {
        ValkyrieLink.PELVIS,
        ValkyrieLink.TORSO,
        ValkyrieLink.RIGHT_COP_FRAME,
        ValkyrieLink.LEFT_COP_FRAME,
        ValkyrieLink.RIGHT_PALM,
        ValkyrieLink.LEFT_PALM,
        ValkyrieLink.HEAD,
    }
)


class BodyPart(Enum):
    PELVIS = "pelvis"
    LEFT_LEG = "left_leg"
    RIGHT_LEG = "right_leg"
    TORSO = "torso"
    LEFT_ARM = "left_arm"
    RIGHT_ARM = "right_arm"
    NECK = "neck"


def _slots(*names: str) -> tuple[int, ...]:
    return tuple(JOINT_NAME_TO_INDEX[name] for name in names)


# Arms carry two trailing wrist slots (roll, pitch) the model does not have;
# the controller expects seven arm joints.
JOINT_INDICES: Final = MappingProxyType(
    {
        BodyPart.PELVIS: (
            VIRTUAL_X,
            VIRTUAL_Y,
            VIRTUAL_Z,
            VIRTUAL_QX,
            VIRTUAL_QY,
            VIRTUAL_QZ,
            VIRTUAL_QW,
        ),
        BodyPart.LEFT_LEG: _slots(
            "leftHipYaw",
            "leftHipRoll",
            "leftHipPitch",
            "leftKneePitch",
            "leftAnklePitch",
            "leftAnkleRoll",
        ),
        BodyPart.RIGHT_LEG: _slots(
            "rightHipYaw",
            "rightHipRoll",
            "rightHipPitch",
            "rightKneePitch",
            "rightAnklePitch",
            "rightAnkleRoll",
        ),
        BodyPart.TORSO: _slots("torsoYaw", "torsoPitch", "torsoRoll"),
        BodyPart.LEFT_ARM: _slots(
            "leftShoulderPitch",
            "leftShoulderRoll",
            "leftShoulderYaw",
            "leftElbowPitch",
            "leftForearmYaw",
        )
        + (ABSENT, ABSENT),
        BodyPart.RIGHT_ARM: _slots(
            "rightShoulderPitch",
            "rightShoulderRoll",
            "rightShoulderYaw",
            "rightElbowPitch",
            "rightForearmYaw",
        )
        + (ABSENT, ABSENT),
        BodyPart.NECK: _slots("lowerNeckPitch", "neckYaw", "upperNeckPitch"),
    }
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
