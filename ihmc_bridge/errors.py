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

"""Exceptions raised by the bridge core.

Ignorable input anomalies (unknown joint names, unrecognized status strings)
never raise; they are skipped or logged. Only caller contract violations
surface as exceptions.
"""


class BridgeError(Exception):
    """Base class for all bridge errors."""


class NotReadyError(BridgeError):
    """A whole-body command was requested before pose, joints and links arrived."""


class NothingPendingError(BridgeError):
    """Go-home commands were requested while no body part was flagged for homing."""


class ConfigurationError(BridgeError, ValueError):
    """A configuration vector or lookup violated the robot model layout."""


__all__ = [
    "BridgeError",
    "ConfigurationError",
    "NotReadyError",
    "NothingPendingError",
]
