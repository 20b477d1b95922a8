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

"""Fixed-layout robot configuration vector."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import numpy as np
from numpy.typing import NDArray

from ihmc_bridge.errors import ConfigurationError
from ihmc_bridge.msgs.geometry_msgs import Pose, Quaternion, Vector3
from ihmc_bridge.robot.valkyrie import (
    ABSENT,
    JOINT_INDICES,
    JOINT_NAME_TO_INDEX,
    JOINT_NAMES,
    NUM_ACT_JOINT,
    NUM_Q,
    NUM_VIRTUAL,
    BodyPart,
)


class ConfigurationVector:
    """Root pose (7 slots) followed by the actuated joints, fixed length ``NUM_Q``.

    The length never changes after construction. Values are copied in, so a
    vector is never aliased with caller-owned arrays.

    Example:
        >>> q = ConfigurationVector.from_parts(Pose(), {"leftElbowPitch": 0.3})
        >>> q.select(BodyPart.LEFT_ARM)
        array([0. , 0. , 0. , 0.3, 0. , 0. , 0. ])
    """

    __slots__ = ("_q",)

    def __init__(self, values: Sequence[float] | NDArray[np.floating[Any]] | None = None) -> None:
        if values is None:
            self._q = np.zeros(NUM_Q)
            return

        q = np.array(values, dtype=float).reshape(-1)
        if q.size != NUM_Q:
            raise ConfigurationError(
                f"Configuration vector must have {NUM_Q} values, got {q.size}"
            )
        if not np.all(np.isfinite(q)):
            raise ConfigurationError("Configuration vector contains non-finite values")
        self._q = q

    @classmethod
    def from_parts(
        cls,
        root_pose: Pose,
        joints: Mapping[str, float] | NDArray[np.floating[Any]],
    ) -> ConfigurationVector:
        """Build from a root pose and either joint values by name or the joint region.

        Unknown joint names are skipped.
        """
        config = cls()
        config._q[:NUM_VIRTUAL] = root_pose.to_list()
        if isinstance(joints, Mapping):
            for name, value in joints.items():
                idx = JOINT_NAME_TO_INDEX.get(name)
                if idx is not None:
                    config._q[idx] = float(value)
        else:
            region = np.asarray(joints, dtype=float).reshape(-1)
            if region.size != NUM_ACT_JOINT:
                raise ConfigurationError(
                    f"Joint region must have {NUM_ACT_JOINT} values, got {region.size}"
                )
            config._q[NUM_VIRTUAL:] = region
        if not np.all(np.isfinite(config._q)):
            raise ConfigurationError("Configuration vector contains non-finite values")
        return config

    def __len__(self) -> int:
        return NUM_Q

    def __getitem__(self, idx: int) -> float:
        return float(self._q[idx])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfigurationVector):
            return NotImplemented
        return bool(np.array_equal(self._q, other._q))

    def __repr__(self) -> str:
        return f"ConfigurationVector({self._q.tolist()})"

    @property
    def root_pose(self) -> Pose:
        q = self._q
        return Pose(Vector3(q[0], q[1], q[2]), Quaternion(q[3], q[4], q[5], q[6]))

    @property
    def joints(self) -> NDArray[np.floating[Any]]:
        """Copy of the joint region, in ``JOINT_NAMES`` order."""
        return self._q[NUM_VIRTUAL:].copy()

    def joint(self, name: str) -> float:
        idx = JOINT_NAME_TO_INDEX.get(name)
        if idx is None:
            raise ConfigurationError(f"Unknown joint: {name}")
        return float(self._q[idx])

    def joint_positions(self) -> dict[str, float]:
        return {name: float(self._q[NUM_VIRTUAL + i]) for i, name in enumerate(JOINT_NAMES)}

    def to_numpy(self) -> NDArray[np.floating[Any]]:
        return self._q.copy()

    def select(self, part: BodyPart) -> NDArray[np.floating[Any]]:
        """Values of ``part``'s joint-index table, zero for absent slots."""
        try:
            indices = JOINT_INDICES[part]
        except KeyError:
            raise ConfigurationError(f"No joint-index table for {part}") from None
        return select_indices(self._q, indices)


def select_indices(
    q: NDArray[np.floating[Any]] | Sequence[float], indices: Iterable[int]
) -> NDArray[np.floating[Any]]:
    """Slice ``q`` by ``indices``, substituting 0.0 wherever the index is ``ABSENT``."""
    return np.array([0.0 if idx == ABSENT else float(q[idx]) for idx in indices])


__all__ = ["ConfigurationVector", "select_indices"]
