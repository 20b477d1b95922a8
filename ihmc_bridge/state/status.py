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

"""Operator status signals and the homing request flags they set."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum

from ihmc_bridge.state.readiness import ReadinessAggregator
from ihmc_bridge.utils.logging_config import setup_logger

logger = setup_logger()


class StatusSignal(Enum):
    """Status strings published by the managing controller node.

    Matching is case-sensitive; anything else decodes to ``UNRECOGNIZED``.
    """

    START_LISTENING = "START-LISTENING"
    STOP_LISTENING = "STOP-LISTENING"
    HOME_LEFT_ARM = "HOME-LEFTARM"
    HOME_RIGHT_ARM = "HOME-RIGHTARM"
    HOME_CHEST = "HOME-CHEST"
    HOME_PELVIS = "HOME-PELVIS"
    UNRECOGNIZED = ""

    @classmethod
    def decode(cls, raw: str) -> StatusSignal:
        if not raw:
            return cls.UNRECOGNIZED
        try:
            return cls(raw)
        except ValueError:
            return cls.UNRECOGNIZED


@dataclass
class HomingRequestSet:
    """Pending go-home requests, one flag per body part."""

    left_arm: bool = False
    right_arm: bool = False
    chest: bool = False
    pelvis: bool = False

    def any(self) -> bool:
        return self.left_arm or self.right_arm or self.chest or self.pelvis

    def clear(self) -> None:
        for f in fields(self):
            setattr(self, f.name, False)

    def pending(self) -> list[str]:
        return [f.name for f in fields(self) if getattr(self, f.name)]


class StatusController:
    """Applies status signals to a ReadinessAggregator and a HomingRequestSet.

    One signal per call. Signals that arrive between two driver ticks are not
    queued; since every effect is an idempotent flag, only the time at which
    the resulting commands go out can coalesce.
    """

    def __init__(
        self, aggregator: ReadinessAggregator, homing: HomingRequestSet | None = None
    ) -> None:
        self._aggregator = aggregator
        self.homing = homing if homing is not None else HomingRequestSet()
        self._status = ""

    @property
    def status(self) -> str:
        """Last recognized status string (empty before the first one)."""
        return self._status

    @property
    def publish_home_requested(self) -> bool:
        return self.homing.any()

    def handle(self, signal: StatusSignal | str) -> StatusSignal:
        """Apply one status signal. Raw strings are decoded first.

        Returns:
            The decoded signal.
        """
        raw = signal.value if isinstance(signal, StatusSignal) else signal
        decoded = signal if isinstance(signal, StatusSignal) else StatusSignal.decode(signal)

        match decoded:
            case StatusSignal.STOP_LISTENING:
                self._aggregator.stop_listening()
                logger.info("Controllers stopped, no longer publishing whole-body messages")
                logger.info("Waiting for status change to receive more joint commands...")
            case StatusSignal.START_LISTENING:
                self._aggregator.start_listening()
                logger.info("Controllers started, waiting for joint commands...")
            case StatusSignal.HOME_LEFT_ARM:
                self.homing.left_arm = True
                logger.info("Homing left arm...")
            case StatusSignal.HOME_RIGHT_ARM:
                self.homing.right_arm = True
                logger.info("Homing right arm...")
            case StatusSignal.HOME_CHEST:
                self.homing.chest = True
                logger.info("Homing chest...")
            case StatusSignal.HOME_PELVIS:
                self.homing.pelvis = True
                logger.info("Homing pelvis...")
            case StatusSignal.UNRECOGNIZED:
                logger.warning(f"Unrecognized status {raw!r}, ignoring status message")
                return decoded

        self._status = raw
        return decoded


__all__ = ["HomingRequestSet", "StatusController", "StatusSignal"]
