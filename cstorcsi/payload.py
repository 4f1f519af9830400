"""Response payloads returned by the volume controller."""

from dataclasses import dataclass, field


def _to_int32(value: int) -> int:
    """Wrap an integer into the signed 32-bit range."""
    return ((value + 2**31) % 2**32) - 2**31


@dataclass
class Volume:
    """A provisioned volume as described in a create response."""

    volume_id: str = ""
    capacity_bytes: int = 0
    volume_context: dict[str, str] = field(default_factory=dict)


@dataclass
class CreateVolumeResponse:
    volume: Volume = field(default_factory=Volume)


@dataclass
class DeleteVolumeResponse:
    """Empty acknowledgement of a volume deletion."""


@dataclass
class ControllerExpandVolumeResponse:
    capacity_bytes: int = 0
    node_expansion_required: bool = False


@dataclass
class Timestamp:
    seconds: int = 0
    nanos: int = 0


@dataclass
class Snapshot:
    size_bytes: int = 0
    snapshot_id: str = ""
    source_volume_id: str = ""
    creation_time: Timestamp | None = None
    ready_to_use: bool = False


@dataclass
class CreateSnapshotResponse:
    snapshot: Snapshot = field(default_factory=Snapshot)


def create_volume_response(
    name: str, capacity: int = 0, context: dict[str, str] | None = None
) -> CreateVolumeResponse:
    """Build the response for a created volume."""
    volume = Volume(
        volume_id=name,
        capacity_bytes=capacity,
        volume_context=dict(context) if context else {},
    )
    return CreateVolumeResponse(volume=volume)


def expand_volume_response(
    capacity_bytes: int, node_expansion_required: bool = False
) -> ControllerExpandVolumeResponse:
    """Build the response for an expanded volume."""
    return ControllerExpandVolumeResponse(
        capacity_bytes=capacity_bytes,
        node_expansion_required=node_expansion_required,
    )


def create_snapshot_response(
    snapshot_id: str,
    source_volume_id: str,
    size: int = 0,
    creation_seconds: int = 0,
    creation_nanos: int = 0,
    ready_to_use: bool = False,
) -> CreateSnapshotResponse:
    """Build the response for a created snapshot.

    The nanoseconds are stored as a signed 32-bit value.
    """
    snapshot = Snapshot(
        size_bytes=size,
        snapshot_id=snapshot_id,
        source_volume_id=source_volume_id,
        creation_time=Timestamp(seconds=creation_seconds, nanos=_to_int32(creation_nanos)),
        ready_to_use=ready_to_use,
    )
    return CreateSnapshotResponse(snapshot=snapshot)