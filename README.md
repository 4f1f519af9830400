# cstorcsi

Building blocks for a cStor CSI volume driver, in plain Python with no
third-party dependencies.

## Modules

- `cstorcsi.rounding`: size helpers. `round_up_gib`, `round_up_bytes`,
  `bytes_to_gib`, `gib_to_bytes`, `round_up_size` and `byte_count`. For
  example, `byte_count(1536)` gives `"1Ki"`, and
  `round_up_gib(1500 * 1024 * 1024)` gives `2`.
- `cstorcsi.units`: `from_human_size` and `to_giga_units` for strings such as
  `"104.5 GB"`, which use decimal (1000) units. `parse_duration` turns strings
  such as `"1h30m"` into nanoseconds. `get_ping_period` picks the usage ping
  interval in nanoseconds: a value that does not parse, or is under one hour,
  falls back to 24 hours.
- `cstorcsi.version`: `VersionInfo`, which reports the driver version. It
  reads a VERSION file if no version was set, and runs
  `git rev-parse --verify HEAD` if no commit was set. `verbose()` and
  `details()` give `"<version>-<short commit>"`.
- `cstorcsi.payload`: CSI response dataclasses (`Volume`,
  `CreateVolumeResponse`, `DeleteVolumeResponse`,
  `ControllerExpandVolumeResponse`, `Timestamp`, `Snapshot`,
  `CreateSnapshotResponse`) and the factories `create_volume_response`,
  `expand_volume_response` and `create_snapshot_response`.
- `cstorcsi.usage`: `VersionSet.from_env` reads the cluster facts from the
  `OPENEBS_IO_*` environment variables. `Usage` builds anonymous usage events
  through `build`, `application_builder`, `install_builder`,
  `set_volume_capacity`, `set_volume_type` and `set_replica_count`, and turns
  them into query parameters with `to_params`. `send(endpoint)` posts the
  event from a background thread and returns that thread. It returns `None`,
  and sends nothing, when the tracking id is not valid.
- `cstorcsi.mount`: `NodeMounter`, which creates files and directories
  (`make_file`, `make_dir`) and checks paths (`exists_path`).
  `get_device_name` looks up the device behind a mount point, and how many
  mounts use it, in a list of mount entries you pass in.
- `cstorcsi.utils`:
  - endpoint parsing: `parse_endpoint` for `unix://` and `tcp://`.
  - `is_quiet_method`, which tells whether a call is too frequent to log.
  - mount table handling: `MountPoint`, `parse_mounts`, `list_mounts` (which
    reads `/proc/mounts` by default), `get_mounts`, `list_contains` and
    `verify_mount_opts`.
  - iSCSI portal reachability: `is_volume_reachable` and
    `wait_for_volume_to_be_reachable`; the latter raises `ConnectionError`
    after its retries.
  - `chmod_mount_path`.
- `cstorcsi.volumes`:
  - `build_volume_config` gives a `VolumeConfig` with the capacity rounded up
    to whole GiB.
  - `get_volume_source_details` splits `volume@snapshot` identifiers.
  - `resize_action` decides whether a resize request needs work, returning a
    `ResizeAction`. It raises `VolumeShrinkError` for a shrink and
    `ResizeInProgressError` while an earlier resize is still running.

## Example

```python
from cstorcsi.rounding import round_up_gib
from cstorcsi.payload import create_volume_response
from cstorcsi.utils import parse_endpoint
from cstorcsi.volumes import resize_action, ResizeAction

round_up_gib(1500 * 1024 * 1024)          # 2
parse_endpoint("unix://csi/csi.sock")     # ("unix", "csi/csi.sock")
resp = create_volume_response("pvc-1", 2 * 1024**3, {"openebs.io/cas-type": "cstor"})
resize_action(2 * 1024**3, 1024**3, 1024**3) is ResizeAction.RESIZE  # True
```

## What this package does not do

This is a library of helpers, not a running driver:

- It has no command-line program.
- It has no gRPC server for the CSI identity, controller or node services.
- It makes no calls to the Kubernetes API. `build_volume_config` and
  `resize_action` only compute what should be stored, and do not create or
  patch any resource.
- It does not mount, unmount, or log in to iSCSI targets.
- It runs no periodic ping loop.

## Running the tests

```
pip install -e .[test]
pytest
```