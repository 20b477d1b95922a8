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

"""Bridge between whole-body controllers and the IHMC humanoid controller interface.

Example:
    >>> from ihmc_bridge import BridgeConfig, IHMCBridge, Memory
    >>> bridge = IHMCBridge(Memory(), BridgeConfig(commands_from_controllers=False))
    >>> bridge.run()
"""

import lazy_loader as lazy

__getattr__, __dir__, __all__ = lazy.attach(
    __name__,
    submodules=["commands", "kinematics", "msgs", "robot", "state", "transport"],
    submod_attrs={
        "bridge": ["IHMCBridge"],
        "commands": ["CommandAssembler", "HomeCommandBuilder", "MessageParameters"],
        "config": ["BridgeConfig"],
        "errors": [
            "BridgeError",
            "ConfigurationError",
            "NotReadyError",
            "NothingPendingError",
        ],
        "kinematics": ["KinematicModel", "PinocchioKinematicModel"],
        "robot": ["BodyPart", "ValkyrieLink"],
        "state": [
            "ConfigurationVector",
            "HomingRequestSet",
            "ReadinessAggregator",
            "StatusController",
            "StatusSignal",
        ],
        "transport": ["Memory", "PubSub"],
    },
)
