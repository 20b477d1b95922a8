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

"""Whole-body command assembly from a configuration vector and a controlled-link set."""

from __future__ import annotations

from collections.abc import Iterable

from ihmc_bridge.commands import builders
from ihmc_bridge.commands.params import MessageParameters
from ihmc_bridge.kinematics.model import KinematicModel
from ihmc_bridge.msgs.controller_msgs import RobotSide, WholeBodyTrajectoryMessage
from ihmc_bridge.robot.valkyrie import BodyPart, ValkyrieLink
from ihmc_bridge.state.configuration import ConfigurationVector
from ihmc_bridge.utils.logging_config import setup_logger

logger = setup_logger()


class CommandAssembler:
    """Builds a WholeBodyTrajectoryMessage for the links being controlled.

    Sub-messages and the link that enables each:
        left arm: leftPalm (jointspace, 7 values)
        right arm: rightPalm (jointspace, 7 values)
        chest: torso (orientation from the kinematic model)
        pelvis: pelvis (pose from the root-pose slots)
        neck: head (jointspace)

    Feet and spine are never commanded, whatever the link set says.

    Args:
        kinematic_model: Source of the chest orientation. Without one the
            chest sub-message is left out.
    """

    def __init__(self, kinematic_model: KinematicModel | None = None) -> None:
        self._kinematic_model = kinematic_model
        self._warned_no_model = False

    @property
    def kinematic_model(self) -> KinematicModel | None:
        return self._kinematic_model

    def assemble(
        self,
        config: ConfigurationVector,
        links: Iterable[int] | None = None,
        params: MessageParameters | None = None,
    ) -> WholeBodyTrajectoryMessage:
        """Assemble one whole-body command.

        Args:
            config: Full robot configuration.
            links: Controlled link ids. Defaults to ``params.controlled_links``.
            params: Message defaults. Defaults to ``MessageParameters.one_shot()``.
        """
        params = params or MessageParameters.one_shot()
        controlled = params.controlled_links if links is None else frozenset(links)

        msg = WholeBodyTrajectoryMessage(sequence_id=params.sequence_id)

        if ValkyrieLink.LEFT_PALM in controlled:
            msg.left_arm_trajectory_message = builders.make_arm_trajectory(
                config.select(BodyPart.LEFT_ARM), RobotSide.LEFT, params
            )

        if ValkyrieLink.RIGHT_PALM in controlled:
            msg.right_arm_trajectory_message = builders.make_arm_trajectory(
                config.select(BodyPart.RIGHT_ARM), RobotSide.RIGHT, params
            )

        if ValkyrieLink.TORSO in controlled:
            if self._kinematic_model is not None:
                orientation = self._kinematic_model.link_orientation(config, ValkyrieLink.TORSO)
                msg.chest_trajectory_message = builders.make_chest_trajectory(orientation, params)
            elif not self._warned_no_model:
                logger.warning("No kinematic model, chest trajectories will not be sent")
                self._warned_no_model = True

        if ValkyrieLink.PELVIS in controlled:
            msg.pelvis_trajectory_message = builders.make_pelvis_trajectory(
                config.select(BodyPart.PELVIS), params
            )

        if ValkyrieLink.HEAD in controlled:
            msg.neck_trajectory_message = builders.make_neck_trajectory(
                config.select(BodyPart.NECK), params
            )

        logger.debug("Assembled whole-body command", parts=msg.commanded_parts())
        return msg


__all__ = ["CommandAssembler"]
