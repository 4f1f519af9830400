"""Node-side helpers: endpoints, mount tables and target reachability."""

from __future__ import annotations

import logging
import os
import re
import socket
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

VOLUME_WAIT_TIMEOUT = 2
"""Seconds between two consecutive volume status checks."""

VOLUME_WAIT_RETRY_COUNT = 6
"""Number of checks made before giving up on a volume."""

MONITOR_MOUNT_RETRY_TIMEOUT = 5
"""Seconds between two consecutive mount monitoring passes."""

GOOGLE_ANALYTICS_KEY = "OPENEBS_IO_ENABLE_ANALYTICS"

DEFAULT_MOUNTS_FILE = "/proc/mounts"
DEFAULT_DIAL_TIMEOUT = 60.0

_ENDPOINT_SCHEMES = ("unix://", "tcp://")
_QUIET_METHODS = (
    "NodeGetCapabilities",
    "NodeGetVolumeStats",
    "ControllerGetCapabilities",
    "GetPluginInfo",
    "GetPluginCapabilities",
    "Probe",
)
_OCTAL_ESCAPE_RE = re.compile(r"\\([0-7]{3})")
_MOUNT_FIELDS = 6


@dataclass
class MountPoint:
    """One entry of the node's mount table."""

    device: str
    path: str
    type: str = ""
    opts: list[str] = field(default_factory=list)
    freq: int = 0
    pass_number: int = 0


def parse_endpoint(endpoint: str) -> tuple[str, str]:
    """Split a ``unix://`` or ``tcp://`` endpoint into protocol and address."""
    if endpoint.lower().startswith(_ENDPOINT_SCHEMES):
        proto, _, addr = endpoint.partition("://")
        if addr:
            return proto, addr
    raise ValueError(f"Invalid endpoint: {endpoint}")


def is_quiet_method(full_method: str) -> bool:
    """Return whether calls to this method are too frequent to be logged."""
    return any(name in full_method for name in _QUIET_METHODS)


def verify_mount_opts(opts: Iterable[str], desired_opt: str) -> bool:
    """Return whether the desired option is among the mount options."""
    return desired_opt in opts


def list_contains(mount_path: str, mounts: Iterable[MountPoint]) -> MountPoint | None:
    """Return the mount point mounted at the given path, if any."""
    return next((mount for mount in mounts if mount.path == mount_path), None)


def _unescape(value: str) -> str:
    return _OCTAL_ESCAPE_RE.sub(lambda m: chr(int(m.group(1), 8)), value)


def parse_mounts(text: str) -> list[MountPoint]:
    """Parse mount table text in the ``/proc/mounts`` format."""
    mounts = []
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) != _MOUNT_FIELDS:
            raise ValueError(
                f"wrong number of fields (expected {_MOUNT_FIELDS}, got {len(fields)}): {line}"
            )
        device, path, fstype, opts, freq, pass_number = fields
        try:
            mounts.append(
                MountPoint(
                    device=_unescape(device),
                    path=_unescape(path),
                    type=fstype,
                    opts=opts.split(","),
                    freq=int(freq),
                    pass_number=int(pass_number),
                )
            )
        except ValueError as exc:
            raise ValueError(f"invalid mount entry: {line}") from exc
    return mounts


def list_mounts(path: str | os.PathLike[str] = DEFAULT_MOUNTS_FILE) -> list[MountPoint]:
    """Read and parse the mount table from a file."""
    with open(path, encoding="utf-8") as handle:
        return parse_mounts(handle.read())


def get_mounts(volume_id: str, mounts: Iterable[MountPoint]) -> list[str]:
    """Return the mounted paths that belong to the given volume."""
    return [mount.path for mount in mounts if volume_id in mount.path]


def _split_host_port(address: str) -> tuple[str, int]:
    if address.startswith("["):
        host, sep, rest = address[1:].partition("]")
        if not sep or not rest.startswith(":"):
            raise ValueError(f"invalid address: {address}")
        port_text = rest[1:]
    else:
        host, sep, port_text = address.rpartition(":")
        if not sep or ":" in host:
            raise ValueError(f"invalid address: {address}")
    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValueError(f"invalid port in address: {address}") from exc
    return host, port


def _dial(target_portal: str, timeout: float) -> None:
    host, port = _split_host_port(target_portal)
    with socket.create_connection((host, port), timeout=timeout):
        pass


def is_volume_reachable(
    volume_id: str, target_portal: str, timeout: float = DEFAULT_DIAL_TIMEOUT
) -> bool:
    """Return whether a TCP connection to the target portal can be made."""
    try:
        _dial(target_portal, timeout)
    except (OSError, ValueError) as exc:
        logger.info(
            "iSCSI Target not reachable, VolumeID: %s TargetPortal %s, err:%s",
            volume_id,
            target_portal,
            exc,
        )
        return False
    logger.info("Volume %s is reachable to create connections", volume_id)
    return True


def wait_for_volume_to_be_reachable(
    volume_id: str,
    target_portal: str,
    retries: int = VOLUME_WAIT_RETRY_COUNT,
    interval: float = VOLUME_WAIT_TIMEOUT,
) -> None:
    """Wait until the target portal accepts connections.

    Raises ``ConnectionError`` once ``retries`` attempts have failed.
    """
    last_error: Exception | None = None
    attempts = max(retries, 1)
    for _ in range(attempts):
        try:
            _dial(target_portal, DEFAULT_DIAL_TIMEOUT)
        except (OSError, ValueError) as exc:
            last_error = exc
        else:
            logger.info("Volume %s is reachable to create connections", volume_id)
            return
        time.sleep(interval)
    raise ConnectionError(
        f"iSCSI Target not reachable for {volume_id}, "
        f"TargetPortal {target_portal}, err:{last_error}"
    )


def chmod_mount_path(mount_path: str | os.PathLike[str]) -> None:
    """Remove all permissions from a mount path that has nothing mounted."""
    os.chmod(mount_path, 0o000)