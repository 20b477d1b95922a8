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

"""Readiness aggregation: decides when a whole-body command may be built.

Pose, joint and controlled-link updates each have an "accepting" flag
(updates are ignored while it is off) and a "received" flag (at least one
update since the last reset). In one-shot mode every accepted update also
switches its own accepting flag off, so exactly one of each is kept.

Not thread-safe on its own; the bridge serializes all access under one lock.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np

from ihmc_bridge.errors import NotReadyError
from ihmc_bridge.msgs.geometry_msgs import Pose
from ihmc_bridge.robot.valkyrie import (
    DEFAULT_CONTROLLED_LINKS,
    JOINT_NAME_TO_INDEX,
    NUM_ACT_JOINT,
    NUM_VIRTUAL,
)
from ihmc_bridge.state.configuration import ConfigurationVector
from ihmc_bridge.utils.logging_config import setup_logger

logger = setup_logger()


@dataclass
class ReadinessState:
    accepting_pose: bool = False
    accepting_joints: bool = False
    accepting_links: bool = False
    received_pose: bool = False
    received_joints: bool = False
    received_links: bool = False

    @property
    def can_publish(self) -> bool:
        return self.received_pose and self.received_links and self.received_joints

    @property
    def should_stop(self) -> bool:
        # Independent of accepting_links: a link-only stream never requests a stop.
        return not self.accepting_pose and not self.accepting_joints


class ReadinessAggregator:
    """Collects pose, joint and link-set updates into one robot configuration.

    Args:
        one_shot: Keep only the first pose, joint and (with a supplier)
            link-set update, then stop accepting. Starts accepting immediately.
            Otherwise nothing is accepted until ``start_listening()``.
        has_link_supplier: Whether controlled-link-set updates will arrive.
            Defaults to ``not one_shot``. Without a supplier the link set is
            fixed to ``DEFAULT_CONTROLLED_LINKS`` and counts as received.
    """

    def __init__(self, one_shot: bool = False, has_link_supplier: bool | None = None) -> None:
        self._one_shot = one_shot
        self._has_link_supplier = (not one_shot) if has_link_supplier is None else has_link_supplier

        self.state = ReadinessState(
            accepting_pose=one_shot,
            accepting_joints=one_shot,
            accepting_links=one_shot and self._has_link_supplier,
            received_links=not self._has_link_supplier,
        )

        self._pose = Pose()
        self._joints = np.zeros(NUM_ACT_JOINT)
        self._links: frozenset[int] = (
            frozenset() if self._has_link_supplier else DEFAULT_CONTROLLED_LINKS
        )

    @property
    def one_shot(self) -> bool:
        return self._one_shot

    @property
    def has_link_supplier(self) -> bool:
        return self._has_link_supplier

    @property
    def controlled_links(self) -> frozenset[int]:
        return self._links

    @property
    def pose(self) -> Pose:
        return self._pose

    # =========================================================================
    # Inbound updates
    # =========================================================================

    def on_pose_update(self, pose: Pose) -> None:
        if not self.state.accepting_pose:
            return
        values = pose.to_list()
        if not np.all(np.isfinite(values)):
            logger.warning("Ignoring root pose with non-finite values", values=values)
            return
        self._pose = Pose.from_components(pose.position.to_list(), pose.orientation.to_list())
        self.state.received_pose = True
        if self._one_shot:
            self.state.accepting_pose = False
        logger.debug("Root pose received", position=pose.position.to_tuple())

    def on_link_set_update(self, links: Iterable[int]) -> None:
        if not self.state.accepting_links:
            return
        self._links = frozenset(int(link) for link in links)
        self.state.received_links = True
        if self._one_shot:
            self.state.accepting_links = False
        logger.debug("Controlled links received", links=sorted(self._links))

    def on_joint_update(self, joints: Iterable[tuple[str, float]]) -> None:
        """Replace the joint region with ``joints``; joints not listed become zero.

        Names the model does not know are skipped. An update carrying a non-finite
        value is ignored as a whole.
        """
        if not self.state.accepting_joints:
            return
        region = np.zeros(NUM_ACT_JOINT)
        for name, value in joints:
            idx = JOINT_NAME_TO_INDEX.get(name)
            if idx is None:
                continue
            region[idx - NUM_VIRTUAL] = float(value)
        if not np.all(np.isfinite(region)):
            logger.warning("Ignoring joint command with non-finite values")
            return
        self._joints = region
        self.state.received_joints = True
        if self._one_shot:
            self.state.accepting_joints = False
        logger.debug("Joint command received")

    # =========================================================================
    # Listening transitions
    # =========================================================================

    def start_listening(self) -> None:
        self.state.accepting_pose = True
        self.state.accepting_joints = True
        self.state.accepting_links = self._has_link_supplier
        self.state.received_pose = False
        self.state.received_joints = False
        self.state.received_links = not self._has_link_supplier

    def stop_listening(self) -> None:
        self.state.accepting_pose = False
        self.state.accepting_joints = False
        self.state.accepting_links = False
        self.state.received_pose = False
        self.state.received_joints = False
        self.state.received_links = False

    # =========================================================================
    # Derived state
    # =========================================================================

    def can_publish(self) -> bool:
        return self.state.can_publish

    def should_stop(self) -> bool:
        return self.state.should_stop

    def is_waiting(self) -> bool:
        """Accepting at least one input but not yet ready to publish."""
        state = self.state
        accepting = state.accepting_pose or state.accepting_joints or state.accepting_links
        return accepting and not state.can_publish

    def configuration(self) -> ConfigurationVector:
        """Configuration built from the latest root pose and joint command.

        Raises:
            NotReadyError: If pose, joints or links have not all been received.
        """
        if not self.can_publish():
            missing = [
                name
                for name, received in (
                    ("pose", self.state.received_pose),
                    ("joints", self.state.received_joints),
                    ("links", self.state.received_links),
                )
                if not received
            ]
            raise NotReadyError(f"Still waiting for: {', '.join(missing)}")
        return ConfigurationVector.from_parts(self._pose, self._joints)


__all__ = ["ReadinessAggregator", "ReadinessState"]
