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

"""Kinematic model interface used to derive link orientations from a configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ihmc_bridge.msgs.geometry_msgs import Quaternion
    from ihmc_bridge.robot.valkyrie import ValkyrieLink
    from ihmc_bridge.state.configuration import ConfigurationVector


@runtime_checkable
class KinematicModel(Protocol):
    """Forward kinematics over the fixed configuration layout.

    Implementations:
        - PinocchioKinematicModel: URDF with a free-flyer root, via pinocchio
    """

    def link_orientation(self, config: ConfigurationVector, link: ValkyrieLink) -> Quaternion:
        """World orientation of ``link`` for the robot posed at ``config``."""
        ...


__all__ = ["KinematicModel"]
