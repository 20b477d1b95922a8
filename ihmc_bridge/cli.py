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

from dataclasses import asdict
import inspect
import json
import logging
from pathlib import Path
from types import UnionType
from typing import Any, Optional, Union, get_args, get_origin

import typer

from ihmc_bridge.bridge import IHMCBridge
from ihmc_bridge.config import BridgeConfig
from ihmc_bridge.msgs.geometry_msgs import Pose
from ihmc_bridge.msgs.sensor_msgs import JointState
from ihmc_bridge.transport.pubsub import Memory
from ihmc_bridge.utils.logging_config import set_log_level, setup_exception_handler

main = typer.Typer()


def create_dynamic_callback():  # type: ignore[no-untyped-def]
    fields = BridgeConfig.model_fields

    params = [
        inspect.Parameter("ctx", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=typer.Context),
    ]

    for field_name, field_info in fields.items():
        field_type = field_info.annotation

        # Optional[T] / T | None -> T
        if get_origin(field_type) in (Union, UnionType):
            inner_types = get_args(field_type)
            if len(inner_types) == 2 and type(None) in inner_types:
                actual_type = next(t for t in inner_types if t is not type(None))
            else:
                actual_type = field_type
        else:
            actual_type = field_type

        cli_option_name = field_name.replace("_", "-")

        if actual_type is bool:
            param = inspect.Parameter(
                field_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=typer.Option(
                    None,  # None means use the model's default if not provided
                    f"--{cli_option_name}/--no-{cli_option_name}",
                    help=f"Override {field_name} in BridgeConfig",
                ),
                annotation=Optional[bool],  # noqa: UP045
            )
        else:
            param = inspect.Parameter(
                field_name,
                inspect.Parameter.KEYWORD_ONLY,
                default=typer.Option(
                    None,  # None means use the model's default if not provided
                    f"--{cli_option_name}",
                    help=f"Override {field_name} in BridgeConfig",
                ),
                annotation=Optional[actual_type],  # noqa: UP045
            )
        params.append(param)

    def callback(**kwargs) -> None:  # type: ignore[no-untyped-def]
        ctx = kwargs.pop("ctx")
        overrides = {k: v for k, v in kwargs.items() if v is not None}
        ctx.obj = BridgeConfig(**overrides)

    callback.__signature__ = inspect.Signature(params)  # type: ignore[attr-defined]

    return callback


main.callback()(create_dynamic_callback())


def _apply_log_level(config: BridgeConfig) -> None:
    set_log_level(getattr(logging, config.log_level.upper(), logging.INFO))


def _decode_event(topic: str, data: Any) -> Any:
    match topic:
        case "pose":
            return Pose.from_components(data["position"], data["orientation"])
        case "joints":
            if "name" in data:
                return JointState(name=list(data["name"]), position=list(data["position"]))
            return JointState.from_dict(data)
        case "links":
            return [int(link) for link in data]
        case "status":
            return str(data)
        case _:
            raise ValueError(f"Unknown event topic {topic!r}")


@main.command()
def config(ctx: typer.Context) -> None:
    """Print the effective configuration as JSON."""
    bridge_config: BridgeConfig = ctx.obj
    typer.echo(bridge_config.model_dump_json(indent=2))


@main.command()
def replay(
    ctx: typer.Context,
    events_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="JSON lines of {topic, data} input events"
    ),
    one_shot: Optional[bool] = typer.Option(  # noqa: UP045
        None, "--one-shot/--streaming", help="Override the bridge mode"
    ),
    urdf: Optional[Path] = typer.Option(  # noqa: UP045
        None, "--urdf", exists=True, dir_okay=False, help="URDF for chest orientation"
    ),
) -> None:
    """Feed recorded input events through a bridge and print every published command."""
    bridge_config: BridgeConfig = ctx.obj
    updates: dict[str, Any] = {"one_shot_settle_time": 0.0}
    if one_shot is not None:
        updates["commands_from_controllers"] = not one_shot
    if urdf is not None:
        updates["urdf_path"] = urdf
    bridge_config = bridge_config.model_copy(update=updates)
    _apply_log_level(bridge_config)

    bus = Memory()

    def emit(message: Any, topic: str) -> None:
        typer.echo(json.dumps({"topic": topic, "message": asdict(message)}))

    bus.subscribe(bridge_config.whole_body_topic, emit)
    bus.subscribe(bridge_config.go_home_topic, emit)

    bridge = IHMCBridge(bus, bridge_config)
    bridge.start()
    topics = bridge_config.input_topics

    try:
        with events_file.open(encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    event = json.loads(line)
                    topic = event["topic"]
                    message = _decode_event(topic, event["data"])
                except (ValueError, KeyError, TypeError) as e:
                    typer.echo(f"{events_file}:{line_no}: invalid event: {e}", err=True)
                    raise typer.Exit(code=1) from e

                bus.publish(topics[topic], message)
                if not bridge.tick():
                    break
    finally:
        bridge.stop()


def cli() -> None:
    setup_exception_handler()
    main()


if __name__ == "__main__":
    cli()
