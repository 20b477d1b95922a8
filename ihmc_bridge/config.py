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

"""Bridge settings, read from ``IHMC_BRIDGE_*`` environment variables or ``.env``."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ihmc_bridge.commands.params import (
    DEFAULT_GO_HOME_TRAJECTORY_TIME,
    DEFAULT_STREAM_INTEGRATION_DURATION,
    MessageParameters,
)

IHMC_INPUT_PREFIX = "/ihmc/valkyrie/humanoid_control/input"


class BridgeConfig(BaseSettings):
    commands_from_controllers: bool = Field(
        True, description="Stream commands from managing controllers; false sends one command"
    )
    managing_node: str = "ControllerTestNode"

    pose_topic: str = "controllers/output/ihmc/pelvis_transform"
    controlled_links_topic: str = "controllers/output/ihmc/controlled_link_ids"
    joint_commands_topic: str = "controllers/output/ihmc/joint_commands"
    status_topic: str = "controllers/output/ihmc/controller_status"
    whole_body_topic: str = f"{IHMC_INPUT_PREFIX}/whole_body_trajectory"
    go_home_topic: str = f"{IHMC_INPUT_PREFIX}/go_home"

    rate_hz: float = Field(10.0, gt=0, description="Publish loop rate")
    stream_integration_duration: float = Field(DEFAULT_STREAM_INTEGRATION_DURATION, gt=0)
    go_home_trajectory_time: float = Field(DEFAULT_GO_HOME_TRAJECTORY_TIME, gt=0)
    one_shot_settle_time: float = Field(
        3.0, ge=0, description="Wait after the one-shot command before finishing"
    )
    input_timeout: float | None = Field(
        None, gt=0, description="Warn when accepting inputs but not ready for this long"
    )
    urdf_path: Path | None = None
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="IHMC_BRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def one_shot(self) -> bool:
        return not self.commands_from_controllers

    def _input_topic(self, name: str) -> str:
        if self.commands_from_controllers:
            return f"/{self.managing_node}/{name}"
        return name

    @property
    def input_topics(self) -> dict[str, str]:
        """Resolved inbound topic per input kind."""
        return {
            "pose": self._input_topic(self.pose_topic),
            "links": self._input_topic(self.controlled_links_topic),
            "joints": self._input_topic(self.joint_commands_topic),
            "status": self._input_topic(self.status_topic),
        }

    def message_parameters(self) -> MessageParameters:
        if self.commands_from_controllers:
            params = MessageParameters.streaming(self.stream_integration_duration)
        else:
            params = MessageParameters.one_shot()
        return params.with_go_home_time(self.go_home_trajectory_time)


__all__ = ["BridgeConfig"]
