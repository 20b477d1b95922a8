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

"""Construction of individual IHMC controller messages from message parameters."""

from __future__ import annotations

from collections.abc import Sequence
import time

from ihmc_bridge.commands.params import MessageParameters
from ihmc_bridge.errors import ConfigurationError
from ihmc_bridge.msgs.controller_msgs import (
    ArmTrajectoryMessage,
    ChestTrajectoryMessage,
    ExecutionMode,
    FrameInformation,
    JointspaceTrajectoryMessage,
    NeckTrajectoryMessage,
    OneDoFJointTrajectoryMessage,
    PelvisTrajectoryMessage,
    QueueableMessage,
    RobotSide,
    SE3TrajectoryMessage,
    SE3TrajectoryPointMessage,
    SelectionMatrix3DMessage,
    SO3TrajectoryMessage,
    SO3TrajectoryPointMessage,
    TrajectoryPoint1DMessage,
    WeightMatrix3DMessage,
)
from ihmc_bridge.msgs.geometry_msgs import Point, Pose, Quaternion, Vector3

# =============================================================================
# Shared parts
# =============================================================================


def make_queueable(params: MessageParameters) -> QueueableMessage:
    queueable = params.queueable
    msg = QueueableMessage(
        sequence_id=params.sequence_id,
        execution_mode=queueable.execution_mode,
        message_id=queueable.message_id,
        timestamp=time.time_ns(),
    )
    if queueable.execution_mode == ExecutionMode.QUEUE:
        msg.previous_message_id = queueable.previous_message_id
    if queueable.execution_mode == ExecutionMode.STREAM:
        msg.stream_integration_duration = queueable.stream_integration_duration
    return msg


def make_frame_information(
    trajectory_frame_id: int, data_frame_id: int, params: MessageParameters
) -> FrameInformation:
    return FrameInformation(
        sequence_id=params.sequence_id,
        trajectory_reference_frame_id=trajectory_frame_id,
        data_reference_frame_id=data_frame_id,
    )


def make_selection_matrix(params: MessageParameters) -> SelectionMatrix3DMessage:
    sel = params.selection_matrix
    return SelectionMatrix3DMessage(
        sequence_id=params.sequence_id,
        selection_frame_id=sel.selection_frame_id,
        x_selected=sel.x_selected,
        y_selected=sel.y_selected,
        z_selected=sel.z_selected,
    )


def make_weight_matrix(params: MessageParameters) -> WeightMatrix3DMessage:
    weights = params.weight_matrix
    return WeightMatrix3DMessage(
        sequence_id=params.sequence_id,
        weight_frame_id=weights.weight_frame_id,
        x_weight=weights.x_weight,
        y_weight=weights.y_weight,
        z_weight=weights.z_weight,
    )


# =============================================================================
# Jointspace
# =============================================================================


def make_trajectory_point_1d(
    position: float, params: MessageParameters
) -> TrajectoryPoint1DMessage:
    return TrajectoryPoint1DMessage(
        sequence_id=params.sequence_id,
        time=params.traj_point.time,
        position=float(position),
        velocity=0.0,
    )


def make_one_dof_joint_trajectory(
    position: float, params: MessageParameters
) -> OneDoFJointTrajectoryMessage:
    return OneDoFJointTrajectoryMessage(
        sequence_id=params.sequence_id,
        weight=params.onedof_joint.weight,
        trajectory_points=[make_trajectory_point_1d(position, params)],
    )


def make_jointspace_trajectory(
    positions: Sequence[float], params: MessageParameters
) -> JointspaceTrajectoryMessage:
    """One single-point trajectory per joint, in the order given."""
    return JointspaceTrajectoryMessage(
        sequence_id=params.sequence_id,
        queueing_properties=make_queueable(params),
        joint_trajectory_messages=[make_one_dof_joint_trajectory(p, params) for p in positions],
    )


# =============================================================================
# Taskspace
# =============================================================================


def make_se3_trajectory_point(
    position: Point, orientation: Quaternion, params: MessageParameters
) -> SE3TrajectoryPointMessage:
    return SE3TrajectoryPointMessage(
        sequence_id=params.sequence_id,
        time=params.traj_point.time,
        position=Point(position.x, position.y, position.z),
        orientation=Quaternion(orientation.x, orientation.y, orientation.z, orientation.w),
        linear_velocity=Vector3.zero(),
        angular_velocity=Vector3.zero(),
    )


def make_so3_trajectory_point(
    orientation: Quaternion, params: MessageParameters
) -> SO3TrajectoryPointMessage:
    return SO3TrajectoryPointMessage(
        sequence_id=params.sequence_id,
        time=params.traj_point.time,
        orientation=Quaternion(orientation.x, orientation.y, orientation.z, orientation.w),
        angular_velocity=Vector3.zero(),
    )


def make_se3_trajectory(
    position: Point,
    orientation: Quaternion,
    trajectory_frame_id: int,
    data_frame_id: int,
    params: MessageParameters,
) -> SE3TrajectoryMessage:
    return SE3TrajectoryMessage(
        sequence_id=params.sequence_id,
        taskspace_trajectory_points=[make_se3_trajectory_point(position, orientation, params)],
        frame_information=make_frame_information(trajectory_frame_id, data_frame_id, params),
        angular_selection_matrix=make_selection_matrix(params),
        linear_selection_matrix=make_selection_matrix(params),
        angular_weight_matrix=make_weight_matrix(params),
        linear_weight_matrix=make_weight_matrix(params),
        use_custom_control_frame=params.se3so3.use_custom_control_frame,
        control_frame_pose=Pose.zero(),
        queueing_properties=make_queueable(params),
    )


def make_so3_trajectory(
    orientation: Quaternion,
    trajectory_frame_id: int,
    data_frame_id: int,
    params: MessageParameters,
) -> SO3TrajectoryMessage:
    return SO3TrajectoryMessage(
        sequence_id=params.sequence_id,
        taskspace_trajectory_points=[make_so3_trajectory_point(orientation, params)],
        frame_information=make_frame_information(trajectory_frame_id, data_frame_id, params),
        selection_matrix=make_selection_matrix(params),
        weight_matrix=make_weight_matrix(params),
        use_custom_control_frame=params.se3so3.use_custom_control_frame,
        control_frame_pose=Pose.zero(),
        queueing_properties=make_queueable(params),
    )


# =============================================================================
# Body parts
# =============================================================================


def make_arm_trajectory(
    positions: Sequence[float], side: RobotSide, params: MessageParameters
) -> ArmTrajectoryMessage:
    return ArmTrajectoryMessage(
        sequence_id=params.sequence_id,
        force_execution=params.arm.force_execution,
        robot_side=side,
        jointspace_trajectory=make_jointspace_trajectory(positions, params),
    )


def make_chest_trajectory(
    orientation: Quaternion, params: MessageParameters
) -> ChestTrajectoryMessage:
    """Chest orientation, expressed in world and tracked relative to pelvis z-up."""
    frames = params.frames
    return ChestTrajectoryMessage(
        sequence_id=params.sequence_id,
        so3_trajectory=make_so3_trajectory(
            orientation,
            frames.trajectory_reference_frame_id_pelviszup,
            frames.data_reference_frame_id_world,
            params,
        ),
    )


def make_pelvis_trajectory(
    root_pose: Sequence[float], params: MessageParameters
) -> PelvisTrajectoryMessage:
    """Pelvis pose from the root-pose slots ``[x, y, z, qx, qy, qz, qw]``."""
    if len(root_pose) != 7:
        raise ConfigurationError(f"Root pose must have 7 values, got {len(root_pose)}")
    position = Point(root_pose[0], root_pose[1], root_pose[2])
    orientation = Quaternion(root_pose[3], root_pose[4], root_pose[5], root_pose[6])
    frames = params.frames
    pelvis = params.pelvis
    return PelvisTrajectoryMessage(
        sequence_id=params.sequence_id,
        force_execution=pelvis.force_execution,
        enable_user_pelvis_control=pelvis.enable_user_pelvis_control,
        enable_user_pelvis_control_during_walking=pelvis.enable_user_pelvis_control_during_walking,
        se3_trajectory=make_se3_trajectory(
            position,
            orientation,
            frames.trajectory_reference_frame_id_world,
            frames.data_reference_frame_id_world,
            params,
        ),
    )


def make_neck_trajectory(
    positions: Sequence[float], params: MessageParameters
) -> NeckTrajectoryMessage:
    return NeckTrajectoryMessage(
        sequence_id=params.sequence_id,
        jointspace_trajectory=make_jointspace_trajectory(positions, params),
    )


__all__ = [
    "make_arm_trajectory",
    "make_chest_trajectory",
    "make_frame_information",
    "make_jointspace_trajectory",
    "make_neck_trajectory",
    "make_one_dof_joint_trajectory",
    "make_pelvis_trajectory",
    "make_queueable",
    "make_se3_trajectory",
    "make_se3_trajectory_point",
    "make_selection_matrix",
    "make_so3_trajectory",
    "make_so3_trajectory_point",
    "make_trajectory_point_1d",
    "make_weight_matrix",
]
