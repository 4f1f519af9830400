"""Volume config records and the decisions taken when provisioning or resizing."""

from __future__ import annotations

import enum
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from .rounding import GIB, round_up_bytes, round_up_gib

OPENEBS_VOLUME_POLICY = "openebs.io/volume-policy"
OPENEBS_PVC = "openebs.io/persistent-volume-claim"
OPENEBS_VOLUME_ID = "openebs.io/volumeID"
OPENEBS_CSPC_NAME = "openebs.io/cstor-pool-cluster"
SOURCE_VOLUME_LABEL = "openebs.io/source-volume"
CVC_FINALIZER = "cvc.openebs.io/finalizer"
TARGET_LUN_ID = "0"
DEFAULT_ISCSI_INTERFACE = "default"
VOLUME_CREATED_THROUGH = "openebs.io/created-through"

PHASE_PENDING = "Pending"
NAMESPACE_ENV = "OPENEBS_NAMESPACE"


class VolumeShrinkError(ValueError):
    """Raised when a resize asks for less capacity than already requested."""


class ResizeInProgressError(RuntimeError):
    """Raised when an earlier resize has not finished yet."""


class ResizeAction(enum.Enum):
    """What has to be done to bring a volume to the requested size."""

    NONE = "none"
    RESIZE = "resize"


@dataclass
class VolumeConfig:
    """The desired state of a volume as handed to the volume operator."""

    name: str
    namespace: str = ""
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)
    capacity: str = ""
    provision_capacity: str = ""
    source: str = ""
    node_id: str = ""
    replica_count: str = ""
    dependents_upgraded: bool = False
    phase: str = PHASE_PENDING

    @property
    def is_bound(self) -> bool:
        """Whether the volume has left the pending phase."""
        return self.phase != PHASE_PENDING


def get_volume_source_details(snapshot_id: str) -> tuple[str, str]:
    """Split a ``volume@snapshot`` id into the volume and the snapshot name."""
    parts = snapshot_id.split("@")
    if len(parts) < 2:
        raise ValueError("failed to get volumeSource")
    return parts[0], parts[1]


def build_volume_config(
    size: int,
    vol_name: str,
    replica_count: str,
    cspc_name: str,
    snapshot_id: str = "",
    node_id: str = "",
    policy_name: str = "",
    pvc_name: str = "",
    pvc_annotations: Mapping[str, str] | None = None,
) -> VolumeConfig:
    """Build the config that requests a new volume of ``size`` bytes.

    The capacity is rounded up to whole GiB. ``pvc_annotations`` are the
    annotations of the claim named ``pvc_name``; only the created-through
    marker is carried over from them.
    """
    annotations = {
        OPENEBS_VOLUME_ID: vol_name,
        OPENEBS_VOLUME_POLICY: policy_name,
        OPENEBS_PVC: pvc_name,
    }
    if pvc_name and pvc_annotations and VOLUME_CREATED_THROUGH in pvc_annotations:
        annotations[VOLUME_CREATED_THROUGH] = pvc_annotations[VOLUME_CREATED_THROUGH]

    labels = {OPENEBS_CSPC_NAME: cspc_name}
    if snapshot_id:
        source_volume, _ = get_volume_source_details(snapshot_id)
        labels[SOURCE_VOLUME_LABEL] = source_volume

    quantity = f"{round_up_gib(size)}Gi"
    return VolumeConfig(
        name=vol_name,
        namespace=os.environ.get(NAMESPACE_ENV, ""),
        annotations=annotations,
        labels=labels,
        finalizers=[CVC_FINALIZER],
        capacity=quantity,
        provision_capacity=quantity,
        source=snapshot_id,
        node_id=node_id,
        replica_count=replica_count,
        dependents_upgraded=True,
        phase=PHASE_PENDING,
    )


def _format_bytes(value: int) -> str:
    if value % GIB == 0:
        return f"{value // GIB}Gi"
    return str(value)


def resize_action(
    size: int, spec_capacity: int, status_capacity: int, pending: bool = False
) -> ResizeAction:
    """Decide how to resize a volume to ``size`` bytes.

    ``spec_capacity`` is the capacity already requested and
    ``status_capacity`` the capacity actually provided, both in bytes.
    Shrinking raises ``VolumeShrinkError``; a request while an earlier
    resize is still running raises ``ResizeInProgressError``.
    """
    desired = round_up_bytes(size)
    if desired < spec_capacity:
        raise VolumeShrinkError(
            f"Volume shrink not supported, current: {_format_bytes(status_capacity)} "
            f"requested: {_format_bytes(spec_capacity)}"
        )
    if pending:
        return ResizeAction.RESIZE
    if spec_capacity > status_capacity:
        raise ResizeInProgressError(
            f"ResizeInProgress from: {_format_bytes(status_capacity)} "
            f"to: {_format_bytes(spec_capacity)}"
        )
    if desired == status_capacity:
        return ResizeAction.NONE
    return ResizeAction.RESIZE