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

"""Pinocchio forward kinematics for the Valkyrie configuration layout.

Usage:
    >>> from ihmc_bridge.kinematics.pinocchio_model import PinocchioKinematicModel
    >>> model = PinocchioKinematicModel.from_urdf("valkyrie.urdf")
    >>> chest = model.link_orientation(config, ValkyrieLink.TORSO)
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import numpy as np
import pinocchio  # type: ignore[import-untyped]

from ihmc_bridge.errors import ConfigurationError
from ihmc_bridge.msgs.geometry_msgs import Quaternion
from ihmc_bridge.robot.valkyrie import JOINT_NAMES, NUM_VIRTUAL, ValkyrieLink
from ihmc_bridge.utils.logging_config import setup_logger

if TYPE_CHECKING:
    from numpy.typing import NDArray

    from ihmc_bridge.state.configuration import ConfigurationVector

logger = setup_logger()


class PinocchioKinematicModel:
    """Forward kinematics on a pinocchio model with a free-flyer root.

    Pinocchio's free-flyer configuration is ``[x, y, z, qx, qy, qz, qw]`` like
    the root-pose slots, so those are copied directly. Actuated joints are
    matched by name; joints missing from the URDF keep their neutral value.

    Thread safety: NOT thread-safe, ``data`` is reused between calls.
    """

    def __init__(self, model: pinocchio.Model) -> None:
        self._model = model
        self._data = model.createData()

        # (configuration slot, pinocchio idx_q, pinocchio joint nq)
        self._joint_slots: list[tuple[int, int, int]] = []
        missing = []
        for i, name in enumerate(JOINT_NAMES):
            if not model.existJointName(name):
                missing.append(name)
                continue
            joint = model.joints[model.getJointId(name)]
            self._joint_slots.append((NUM_VIRTUAL + i, joint.idx_q, joint.nq))
        if missing:
            logger.warning("Joints missing from kinematic model", joints=missing)

        self._frame_ids: dict[ValkyrieLink, int] = {}

    @classmethod
    def from_urdf(cls, urdf_path: str | Path) -> PinocchioKinematicModel:
        """Load a URDF file and attach a free-flyer root joint.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(str(urdf_path))
        if not path.exists():
            raise FileNotFoundError(f"Model file not found: {path}")
        model = pinocchio.buildModelFromUrdf(str(path), pinocchio.JointModelFreeFlyer())
        logger.info("Loaded kinematic model", path=str(path), nq=model.nq)
        return cls(model)

    @classmethod
    def from_xml(cls, urdf_xml: str) -> PinocchioKinematicModel:
        """Build from URDF text with a free-flyer root joint."""
        model = pinocchio.buildModelFromXML(urdf_xml, pinocchio.JointModelFreeFlyer())
        return cls(model)

    @property
    def model(self) -> pinocchio.Model:
        return self._model

    @property
    def nq(self) -> int:
        return int(self._model.nq)

    def to_pinocchio_q(self, config: ConfigurationVector) -> NDArray[np.floating[Any]]:
        """Map a configuration vector onto pinocchio's configuration layout.

        Raises:
            ConfigurationError: If the root orientation quaternion has zero norm
        """
        values = config.to_numpy()
        q = pinocchio.neutral(self._model)

        root_quat = values[3:NUM_VIRTUAL]
        quat_norm = float(np.linalg.norm(root_quat))
        if quat_norm < 1e-9:
            raise ConfigurationError("Root orientation quaternion has zero norm")
        q[0:3] = values[0:3]
        q[3:NUM_VIRTUAL] = root_quat / quat_norm

        for slot, idx_q, joint_nq in self._joint_slots:
            angle = values[slot]
            if joint_nq == 1:
                q[idx_q] = angle
            else:
                # Continuous joints are stored as (cos, sin)
                q[idx_q] = np.cos(angle)
                q[idx_q + 1] = np.sin(angle)
        return q

    def _frame_id(self, link: ValkyrieLink) -> int:
        fid = self._frame_ids.get(link)
        if fid is None:
            if not self._model.existFrame(link.urdf_name):
                raise ConfigurationError(f"Link not in kinematic model: {link.urdf_name}")
            fid = self._model.getFrameId(link.urdf_name)
            self._frame_ids[link] = fid
        return fid

    def link_orientation(self, config: ConfigurationVector, link: ValkyrieLink) -> Quaternion:
        fid = self._frame_id(link)
        q = self.to_pinocchio_q(config)
        pinocchio.framesForwardKinematics(self._model, self._data, q)
        quat = pinocchio.Quaternion(self._data.oMf[fid].rotation)
        return Quaternion(quat.x, quat.y, quat.z, quat.w)


__all__ = ["PinocchioKinematicModel"]
