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

"""IHMCBridge: relays controller output to the IHMC whole-body interface.

Inputs (from the managing controller node):
- root pose (``Pose``)
- controlled link ids (sequence of int, streaming mode only)
- joint commands (``JointState``, a name-to-value mapping or (name, value) pairs)
- status strings (streaming mode only)

Outputs (to the IHMC controller):
- ``WholeBodyTrajectoryMessage`` on ``config.whole_body_topic``
- ``GoHomeMessage`` on ``config.go_home_topic``, one publish per message

Example:
    >>> bus = Memory()
    >>> bridge = IHMCBridge(bus, BridgeConfig())
    >>> bridge.start()
    >>> bus.publish(bridge.config.input_topics["status"], "START-LISTENING")
    >>> bridge.tick()
    True
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
import threading
import time
from typing import Any

from ihmc_bridge.commands.assembler import CommandAssembler
from ihmc_bridge.commands.home import HomeCommandBuilder
from ihmc_bridge.config import BridgeConfig
from ihmc_bridge.errors import ConfigurationError, NothingPendingError
from ihmc_bridge.kinematics.model import KinematicModel
from ihmc_bridge.msgs.controller_msgs import GoHomeMessage, WholeBodyTrajectoryMessage
from ihmc_bridge.msgs.geometry_msgs import Pose
from ihmc_bridge.msgs.sensor_msgs import JointState
from ihmc_bridge.state.readiness import ReadinessAggregator, ReadinessState
from ihmc_bridge.state.status import HomingRequestSet, StatusController, StatusSignal
from ihmc_bridge.transport.pubsub import PubSub
from ihmc_bridge.utils.logging_config import setup_logger

logger = setup_logger()


class IHMCBridge:
    """Aggregates controller output and publishes IHMC commands at a fixed rate.

    Streaming mode (``config.commands_from_controllers``): nothing is accepted
    until a START-LISTENING status. Every tick then publishes a whole-body
    command once pose, joints and links are in, plus any pending go-home
    commands.

    One-shot mode: the first pose and joint command are kept, one whole-body
    command is published, and after the settle time the bridge is done.

    Inbound handlers and ticks share one lock. Publishing happens after the
    lock is released, so a subscriber may publish back into the bridge.

    Args:
        bus: Transport for inputs and outputs.
        config: Bridge settings. Defaults to ``BridgeConfig()``.
        kinematic_model: Needed for chest commands. Loaded from
            ``config.urdf_path`` when omitted and a path is configured.
        on_stalled: Called once per stall when ``config.input_timeout`` is set
            and inputs are still missing after that long.
        clock: Monotonic time source, in seconds.
    """

    def __init__(
        self,
        bus: PubSub[str, Any],
        config: BridgeConfig | None = None,
        kinematic_model: KinematicModel | None = None,
        on_stalled: Callable[[ReadinessState], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or BridgeConfig()
        self._bus = bus
        self._on_stalled = on_stalled
        self._clock = clock

        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._unsubscribers: list[Callable[[], None]] = []

        self.aggregator = ReadinessAggregator(one_shot=self.config.one_shot)
        self.homing = HomingRequestSet()
        self.status_controller = StatusController(self.aggregator, self.homing)
        if kinematic_model is None and self.config.urdf_path is not None:
            from ihmc_bridge.kinematics import PinocchioKinematicModel

            kinematic_model = PinocchioKinematicModel.from_urdf(self.config.urdf_path)

        self._params = self.config.message_parameters()
        self.assembler = CommandAssembler(kinematic_model)
        self.home_builder = HomeCommandBuilder(self._params)

        self._done = False
        self._waiting_since: float | None = None
        self._stall_reported = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def started(self) -> bool:
        return bool(self._unsubscribers)

    @property
    def done(self) -> bool:
        """True once the one-shot command has been sent."""
        return self._done

    @property
    def status(self) -> str:
        """Last recognized status string."""
        return self.status_controller.status

    def start(self) -> None:
        """Subscribe to the input topics."""
        if self.started:
            return

        topics = self.config.input_topics
        self._unsubscribers.append(self._bus.subscribe(topics["pose"], self._on_pose))
        self._unsubscribers.append(self._bus.subscribe(topics["joints"], self._on_joints))
        if not self.config.one_shot:
            self._unsubscribers.append(self._bus.subscribe(topics["links"], self._on_links))
            self._unsubscribers.append(self._bus.subscribe(topics["status"], self._on_status))

        if self.config.one_shot:
            logger.info("Bridge started, waiting for joint commands...")
        else:
            logger.info("Bridge started, waiting for controller status...")

    def stop(self) -> None:
        """Stop ``run()`` and unsubscribe. Safe to call from another thread."""
        self._stop_event.set()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def run(self) -> None:
        """Tick at ``config.rate_hz`` until stopped or, in one-shot mode, done."""
        self.start()
        period = 1.0 / self.config.rate_hz
        logger.info(f"Bridge running at {self.config.rate_hz}Hz")

        while not self._stop_event.is_set():
            tick_start = time.perf_counter()
            if not self.tick():
                break
            elapsed = time.perf_counter() - tick_start
            self._stop_event.wait(max(0.0, period - elapsed))

        if self._done:
            logger.info("Published whole-body message, all done!")
        else:
            logger.info("Bridge stopped")

    # =========================================================================
    # Inbound handlers
    # =========================================================================

    def _on_pose(self, msg: Pose, _topic: str) -> None:
        with self._lock:
            self.aggregator.on_pose_update(msg)

    def _on_links(self, msg: Iterable[int], _topic: str) -> None:
        with self._lock:
            self.aggregator.on_link_set_update(msg)

    def _on_joints(
        self,
        msg: JointState | Mapping[str, float] | Iterable[tuple[str, float]],
        _topic: str,
    ) -> None:
        pairs = msg.items() if hasattr(msg, "items") else msg
        with self._lock:
            self.aggregator.on_joint_update(pairs)

    def _on_status(self, msg: str | StatusSignal, _topic: str) -> None:
        with self._lock:
            self.status_controller.handle(msg)

    # =========================================================================
    # Publishing
    # =========================================================================

    def _assemble_locked(self) -> WholeBodyTrajectoryMessage:
        config = self.aggregator.configuration()
        return self.assembler.assemble(config, self.aggregator.controlled_links, self._params)

    def _try_assemble_locked(self) -> WholeBodyTrajectoryMessage | None:
        try:
            return self._assemble_locked()
        except ConfigurationError as e:
            logger.warning("Skipping whole-body message", error=str(e))
            return None

    def publish_whole_body(self) -> WholeBodyTrajectoryMessage:
        """Build and publish one whole-body command from the latest inputs.

        Raises:
            NotReadyError: If pose, joints or links are still missing.
            ConfigurationError: If the kinematic model rejects the configuration.
        """
        with self._lock:
            msg = self._assemble_locked()
        self._bus.publish(self.config.whole_body_topic, msg)
        return msg

    def publish_go_home(self) -> list[GoHomeMessage]:
        """Publish one go-home command per pending homing request.

        Raises:
            NothingPendingError: If no homing request is pending.
        """
        with self._lock:
            if not self.homing.any():
                raise NothingPendingError("No homing requests pending")
            commands = self.home_builder.build_pending(self.homing)
        for command in commands:
            self._bus.publish(self.config.go_home_topic, command)
        return commands

    def tick(self) -> bool:
        """Run one publish cycle.

        Returns:
            False once the bridge has nothing left to do (one-shot sent).
        """
        if self._done:
            return False
        if self.config.one_shot:
            return self._tick_one_shot()
        self._tick_streaming()
        return True

    def _tick_streaming(self) -> None:
        whole_body = None
        homes: list[GoHomeMessage] = []
        with self._lock:
            stalled = self._check_stall_locked()
            if self.aggregator.can_publish():
                whole_body = self._try_assemble_locked()
            if self.homing.any():
                homes = self.home_builder.build_pending(self.homing)

        if stalled is not None:
            self._report_stall(stalled)
        if whole_body is not None:
            logger.debug("Streaming whole-body message", parts=whole_body.commanded_parts())
            self._bus.publish(self.config.whole_body_topic, whole_body)
        if homes:
            logger.info("Publishing go home message", count=len(homes))
            for command in homes:
                self._bus.publish(self.config.go_home_topic, command)

    def _tick_one_shot(self) -> bool:
        whole_body = None
        with self._lock:
            stalled = self._check_stall_locked()
            if self.aggregator.can_publish() and self.aggregator.should_stop():
                whole_body = self._try_assemble_locked()

        if stalled is not None:
            self._report_stall(stalled)
        if whole_body is None:
            return True

        logger.info("Preparing and executing whole-body message...")
        self._bus.publish(self.config.whole_body_topic, whole_body)
        self._done = True
        self._stop_event.wait(self.config.one_shot_settle_time)
        return False

    # =========================================================================
    # Stalled inputs
    # =========================================================================

    def _check_stall_locked(self) -> ReadinessState | None:
        """Snapshot of the readiness state if a stall was just detected."""
        timeout = self.config.input_timeout
        if timeout is None:
            return None

        if not self.aggregator.is_waiting():
            self._waiting_since = None
            self._stall_reported = False
            return None

        now = self._clock()
        if self._waiting_since is None:
            self._waiting_since = now
            return None
        if self._stall_reported or now - self._waiting_since < timeout:
            return None

        self._stall_reported = True
        return replace(self.aggregator.state)

    def _report_stall(self, state: ReadinessState) -> None:
        missing = [
            name
            for name, accepting, received in (
                ("pose", state.accepting_pose, state.received_pose),
                ("joints", state.accepting_joints, state.received_joints),
                ("links", state.accepting_links, state.received_links),
            )
            if accepting and not received
        ]
        logger.warning(
            f"No complete input after {self.config.input_timeout}s", missing=missing
        )
        if self._on_stalled is not None:
            self._on_stalled(state)


__all__ = ["IHMCBridge"]
