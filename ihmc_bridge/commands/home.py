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

"""Go-home commands for the body parts flagged in a HomingRequestSet."""

from __future__ import annotations

from ihmc_bridge.commands.params import MessageParameters
from ihmc_bridge.msgs.controller_msgs import GoHomeMessage
from ihmc_bridge.state.status import HomingRequestSet


class HomeCommandBuilder:
    """Turns pending homing flags into GoHomeMessages, clearing each flag it consumes.

    Sequence id and trajectory time come from ``params`` (one-shot defaults if omitted).
    """

    def __init__(self, params: MessageParameters | None = None) -> None:
        self._params = params or MessageParameters.one_shot()

    @property
    def params(self) -> MessageParameters:
        return self._params

    def _make(self, body_part: int, side: int, duration: float) -> GoHomeMessage:
        return GoHomeMessage(
            sequence_id=self._params.sequence_id,
            humanoid_body_part=body_part,
            robot_side=side,
            trajectory_time=duration,
        )

    def build_pending(
        self, requests: HomingRequestSet, duration: float | None = None
    ) -> list[GoHomeMessage]:
        """Commands in the order left arm, right arm, chest, pelvis.

        ``duration`` overrides ``params.go_home.trajectory_time``. Returns an
        empty list when nothing is flagged.
        """
        if duration is None:
            duration = self._params.go_home.trajectory_time
        commands = []
        if requests.left_arm:
            commands.append(
                self._make(
                    GoHomeMessage.HUMANOID_BODY_PART_ARM, GoHomeMessage.ROBOT_SIDE_LEFT, duration
                )
            )
            requests.left_arm = False
        if requests.right_arm:
            commands.append(
                self._make(
                    GoHomeMessage.HUMANOID_BODY_PART_ARM, GoHomeMessage.ROBOT_SIDE_RIGHT, duration
                )
            )
            requests.right_arm = False
        if requests.chest:
            commands.append(
                self._make(
                    GoHomeMessage.HUMANOID_BODY_PART_CHEST, GoHomeMessage.ROBOT_SIDE_LEFT, duration
                )
            )
            requests.chest = False
        if requests.pelvis:
            commands.append(
                self._make(
                    GoHomeMessage.HUMANOID_BODY_PART_PELVIS, GoHomeMessage.ROBOT_SIDE_LEFT, duration
                )
            )
            requests.pelvis = False
        return commands


__all__ = ["HomeCommandBuilder"]
