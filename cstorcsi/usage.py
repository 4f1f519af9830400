"""Anonymous usage events describing the driver and its environment."""

from __future__ import annotations

import logging
import os
import re
import threading
import urllib.parse
import urllib.request
from collections.abc import Mapping
from dataclasses import dataclass

from .units import to_giga_units

logger = logging.getLogger(__name__)

GA_CLIENT_ID = "UA-127388617-1"

INSTALL_EVENT = "install"
PING = "cstor-csi-ping"
VOLUME_PROVISION = "volume-provision"
VOLUME_DEPROVISION = "volume-deprovision"
APP_NAME = "OpenEBS"

RUNNING_STATUS = "running"
EVENT_LABEL_NODE = "nodes"
EVENT_LABEL_CAPACITY = "capacity"

REPLICA = "replica:"
DEFAULT_REPLICA_COUNT = "replica:3"

DEFAULT_CAS_TYPE = "cstor"

CLUSTER_UUID_ENV = "OPENEBS_IO_USAGE_UUID"
CLUSTER_VERSION_ENV = "OPENEBS_IO_K8S_VERSION"
CLUSTER_ARCH_ENV = "OPENEBS_IO_K8S_ARCH"
OPENEBS_VERSION_ENV = "OPENEBS_IO_VERSION_TAG"
NODE_TYPE_ENV = "OPENEBS_IO_NODE_TYPE"
INSTALLER_TYPE_ENV = "OPENEBS_IO_INSTALLER_TYPE"

_TRACKING_ID_RE = re.compile(r"^UA-\d+-\d+$")
_SEND_TIMEOUT = 10.0


@dataclass
class VersionSet:
    """Mostly fixed facts about the cluster the driver runs in."""

    id: str = ""
    k8s_version: str = ""
    k8s_arch: str = ""
    openebs_version: str = ""
    node_type: str = ""
    installer_type: str = ""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> VersionSet:
        """Read the version set from environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            id=env.get(CLUSTER_UUID_ENV, ""),
            k8s_version=env.get(CLUSTER_VERSION_ENV, ""),
            k8s_arch=env.get(CLUSTER_ARCH_ENV, ""),
            openebs_version=env.get(OPENEBS_VERSION_ENV, ""),
            node_type=env.get(NODE_TYPE_ENV, ""),
            installer_type=env.get(INSTALLER_TYPE_ENV, ""),
        )


@dataclass
class Usage:
    """A single usage event together with application and client details."""

    category: str = ""
    action: str = ""
    label: str = ""
    value: int = 0

    app_version: str = ""
    app_installer_id: str = ""
    app_id: str = ""
    app_name: str = ""

    track_id: str = ""
    client_id: str = ""
    campaign_source: str = ""
    campaign_name: str = ""
    data_source: str = ""
    document_title: str = ""

    def new_event(self, category: str, action: str, label: str, value: int) -> Usage:
        """Set all the event fields at once."""
        self.category = category
        self.action = action
        self.label = label
        self.value = value
        return self

    def build(self, versions: VersionSet) -> Usage:
        """Fill in the project and client identity."""
        self.app_id = APP_NAME
        self.track_id = GA_CLIENT_ID
        self.client_id = versions.id
        self.campaign_source = versions.installer_type
        return self

    def application_builder(self, versions: VersionSet) -> Usage:
        """Fill in the cluster environment for events other than install."""
        self.app_version = versions.openebs_version
        self.app_name = versions.k8s_arch
        self.app_installer_id = versions.k8s_version
        self.data_source = versions.node_type
        return self

    def install_builder(self, versions: VersionSet, cluster_size: int) -> Usage:
        """Fill in an install event for a cluster of the given node count."""
        self.application_builder(versions)
        self.document_title = versions.id
        self.app_id = APP_NAME
        return self.new_event(INSTALL_EVENT, RUNNING_STATUS, EVENT_LABEL_NODE, cluster_size)

    def set_volume_capacity(self, capacity: str) -> Usage:
        """Set the event value to the capacity in whole gigabytes, 0 if unparsable."""
        try:
            self.value = to_giga_units(capacity)
        except ValueError:
            self.value = 0
        return self

    def set_volume_type(self, vol_type: str, method: str) -> Usage:
        """Set the storage engine, defaulting it for provision events."""
        if method == VOLUME_PROVISION and vol_type == "":
            self.app_name = DEFAULT_CAS_TYPE
        else:
            self.app_name = vol_type
        return self

    def set_replica_count(self, count: str, method: str) -> Usage:
        """Set the replica count as the event action."""
        if method == VOLUME_PROVISION and count == "":
            self.action = DEFAULT_REPLICA_COUNT
        else:
            self.action = REPLICA + count
        return self

    def to_params(self) -> dict[str, str]:
        """Return the hit as measurement protocol query parameters."""
        return {
            "v": "1",
            "tid": self.track_id,
            "cid": self.client_id,
            "cs": self.campaign_source,
            "cc": self.client_id,
            "cn": self.campaign_name,
            "aid": self.app_id,
            "av": self.app_version,
            "ds": self.data_source,
            "an": self.app_name,
            "aiid": self.app_installer_id,
            "dt": self.document_title,
            "t": "event",
            "ec": self.category,
            "ea": self.action,
            "el": self.label,
            "ev": str(self.value),
        }

    def send(self, endpoint: str) -> threading.Thread | None:
        """Post the hit in the background.

        Returns the sending thread, or ``None`` when the tracking id is
        not valid and nothing is sent.
        """
        if not _TRACKING_ID_RE.match(self.track_id):
            return None
        body = urllib.parse.urlencode(self.to_params()).encode("utf-8")
        thread = threading.Thread(target=_post, args=(endpoint, body), daemon=True)
        thread.start()
        return thread


def _post(endpoint: str, body: bytes) -> None:
    request = urllib.request.Request(
        endpoint,
        data=body,
        method="POST",
        headers={"Content-Type": "application/x-www-form-urlencoded"},
    )
    try:
        with urllib.request.urlopen(request, timeout=_SEND_TIMEOUT) as response:
            response.read()
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)