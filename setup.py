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

from setuptools import find_packages, setup

setup(
    name="ihmc-bridge",
    version="0.1.0",
    description="Relay whole-body controller output to the IHMC humanoid controller interface",
    python_requires=">=3.10",
    packages=find_packages(include=["ihmc_bridge", "ihmc_bridge.*"]),
    package_dir={"": "."},
    install_requires=[
        "numpy>=1.24",
        "structlog>=24.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "typer>=0.12",
        "lazy_loader>=0.4",
        "pin>=2.7",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "ihmc-bridge=ihmc_bridge.cli:cli",
        ],
    },
)
