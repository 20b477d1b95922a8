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

from __future__ import annotations

from dataclasses import dataclass, field

from ihmc_bridge.msgs.geometry_msgs.Quaternion import Quaternion, QuaternionConvertable
from ihmc_bridge.msgs.geometry_msgs.Vector3 import Vector3, VectorConvertable


@dataclass
class Pose:
    """Position and orientation. Defaults to the origin with identity orientation."""

    position: Vector3 = field(default_factory=Vector3)
    orientation: Quaternion = field(default_factory=Quaternion)

    @classmethod
    def from_components(
        cls, position: VectorConvertable, orientation: QuaternionConvertable
    ) -> Pose:
        return cls(Vector3.from_sequence(position), Quaternion.from_sequence(orientation))

    @classmethod
    def zero(cls) -> Pose:
        """All-zero pose, including the quaternion (used for unused control frames)."""
        return cls(Vector3(), Quaternion(0.0, 0.0, 0.0, 0.0))

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    @property
    def z(self) -> float:
        return self.position.z

    def to_list(self) -> list[float]:
        """Flattened [x, y, z, qx, qy, qz, qw]."""
        return self.position.to_list() + self.orientation.to_list()
