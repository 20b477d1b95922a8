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

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeAlias

import numpy as np

# Types that can be converted to a Quaternion
QuaternionConvertable: TypeAlias = Sequence[int | float] | np.ndarray


@dataclass
class Quaternion:
    """Orientation quaternion in (x, y, z, w) order. Defaults to identity."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __post_init__(self) -> None:
        self.x = float(self.x)
        self.y = float(self.y)
        self.z = float(self.z)
        self.w = float(self.w)

    @classmethod
    def from_sequence(cls, sequence: QuaternionConvertable) -> Quaternion:
        if isinstance(sequence, np.ndarray):
            if sequence.size != 4:
                raise ValueError("Quaternion requires exactly 4 components [x, y, z, w]")
        elif len(sequence) != 4:
            raise ValueError("Quaternion requires exactly 4 components [x, y, z, w]")
        return cls(sequence[0], sequence[1], sequence[2], sequence[3])

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Tuple representation of the quaternion (x, y, z, w)."""
        return (self.x, self.y, self.z, self.w)

    def to_list(self) -> list[float]:
        """List representation of the quaternion (x, y, z, w)."""
        return [self.x, self.y, self.z, self.w]

    def to_numpy(self) -> np.ndarray:
        """Numpy array representation of the quaternion (x, y, z, w)."""
        return np.array([self.x, self.y, self.z, self.w])

    def norm(self) -> float:
        return float(np.linalg.norm(self.to_numpy()))

    def normalized(self) -> Quaternion:
        n = self.norm()
        if n == 0.0:
            raise ValueError("Cannot normalize a zero quaternion")
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def __getitem__(self, idx: int) -> float:
        """Allow indexing into quaternion components: 0=x, 1=y, 2=z, 3=w."""
        if idx == 0:
            return self.x
        elif idx == 1:
            return self.y
        elif idx == 2:
            return self.z
        elif idx == 3:
            return self.w
        else:
            raise IndexError(f"Quaternion index {idx} out of range [0-3]")

    def __repr__(self) -> str:
        return f"Quaternion({self.x:.6f}, {self.y:.6f}, {self.z:.6f}, {self.w:.6f})"
