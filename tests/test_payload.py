import dataclasses

from cstorcsi.payload import (
    ControllerExpandVolumeResponse,
    CreateSnapshotResponse,
    CreateVolumeResponse,
    DeleteVolumeResponse,
    Snapshot,
    Timestamp,
    Volume,
    create_snapshot_response,
    create_volume_response,
    expand_volume_response,
)


def test_create_volume_response_fields():
    context = {"openebs.io/cas-type": "cstor"}
    response = create_volume_response("pvc-1", 1073741824, context)
    assert response.volume.volume_id == "pvc-1"
    assert response.volume.capacity_bytes == 1073741824
    assert response.volume.volume_context == context


def test_create_volume_response_copies_context():
    context = {"key": "value"}
    response = create_volume_response("pvc-2", 10, context)
    context["key"] = "changed"
    assert response.volume.volume_context == {"key": "value"}


def test_create_volume_response_defaults():
    response = create_volume_response("pvc-3")
    assert response == CreateVolumeResponse(volume=Volume(volume_id="pvc-3"))
    assert response.volume.volume_context == {}


def test_delete_volume_response_is_empty():
    assert dataclasses.asdict(DeleteVolumeResponse()) == {}


def test_expand_volume_response():
    response = expand_volume_response(2147483648, True)
    assert response == ControllerExpandVolumeResponse(
        capacity_bytes=2147483648, node_expansion_required=True
    )


def test_expand_volume_response_default_no_node_expansion():
    assert expand_volume_response(5).node_expansion_required is False


def test_create_snapshot_response_fields():
    response = create_snapshot_response("snap-1", "pvc-1", 4096, 1600000000, 250, True)
    assert response == CreateSnapshotResponse(
        snapshot=Snapshot(
            size_bytes=4096,
            snapshot_id="snap-1",
            source_volume_id="pvc-1",
            creation_time=Timestamp(seconds=1600000000, nanos=250),
            ready_to_use=True,
        )
    )


def test_snapshot_nanos_wrap_to_int32():
    response = create_snapshot_response("s", "v", creation_nanos=2**31)
    assert response.snapshot.creation_time.nanos == -(2**31)


def test_snapshot_nanos_within_range_unchanged():
    for nanos in (0, 999999999, -5):
        response = create_snapshot_response("s", "v", creation_nanos=nanos)
        assert response.snapshot.creation_time.nanos == nanos


def test_snapshot_defaults_not_ready():
    response = create_snapshot_response("s", "v")
    assert response.snapshot.ready_to_use is False
    assert response.snapshot.size_bytes == 0