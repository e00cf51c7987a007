"""SR-IOV and InfiniBand SR-IOV network resources and their CNI render data."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

from .schema import ObjectMeta

log = logging.getLogger(__name__)

LAST_NETWORK_NAMESPACE = "operator.sriovnetwork.openshift.io/last-network-namespace"
NETATTDEF_FINALIZER_NAME = "netattdef.finalizers.sriovnetwork.openshift.io"

SRIOV_CNI_STATE_ENABLE = "enable"
SRIOV_CNI_STATE_DISABLE = "disable"
SRIOV_CNI_STATE_AUTO = "auto"
SRIOV_CNI_STATE_OFF = "off"
SRIOV_CNI_STATE_ON = "on"
SRIOV_CNI_IPAM_EMPTY = '"ipam":{}'

_LINK_STATES = (SRIOV_CNI_STATE_ENABLE, SRIOV_CNI_STATE_DISABLE, SRIOV_CNI_STATE_AUTO)
_ON_OFF = (SRIOV_CNI_STATE_ON, SRIOV_CNI_STATE_OFF)


def _prefix(resource_prefix: str | None) -> str:
    if resource_prefix is None:
        return os.environ.get("RESOURCE_PREFIX", "")
    return resource_prefix


def _ipam(ipam: str) -> str:
    if ipam:
        return '"ipam":' + "".join(ipam.split())
    return SRIOV_CNI_IPAM_EMPTY


def _common_data(
    cni_type: str,
    name: str,
    namespace: str,
    resource_name: str,
    resource_prefix: str | None,
    capabilities: str,
    link_state: str,
    ipam: str,
    meta_plugins: str,
) -> dict[str, Any]:
    data: dict[str, Any] = {
        "CniType": cni_type,
        "SriovNetworkName": name,
        "SriovNetworkNamespace": namespace,
        "SriovCniResourceName": f"{_prefix(resource_prefix)}/{resource_name}",
    }
    if link_state in _LINK_STATES:
        data["StateConfigured"] = True
        data["SriovCniState"] = link_state
    else:
        data["StateConfigured"] = False

    if capabilities:
        data["CapabilitiesConfigured"] = True
        data["SriovCniCapabilities"] = capabilities
    else:
        data["CapabilitiesConfigured"] = False

    data["SriovCniIpam"] = _ipam(ipam)

    data["MetaPluginsConfigured"] = bool(meta_plugins)
    if meta_plugins:
        data["MetaPlugins"] = meta_plugins
    return data


@dataclass
class SriovNetworkSpec:
    """Desired state of an SR-IOV network."""

    resource_name: str = ""
    network_namespace: str = ""
    capabilities: str = ""
    ipam: str = ""
    vlan: int = 0
    vlan_qos: int = 0
    spoof_chk: str = ""
    trust: str = ""
    link_state: str = ""
    min_tx_rate: int | None = None
    max_tx_rate: int | None = None
    meta_plugins_config: str = ""


@dataclass
class SriovNetwork:
    """An SR-IOV network rendered into a network attachment definition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovNetworkSpec = field(default_factory=SriovNetworkSpec)

    def target_namespace(self) -> str:
        """Namespace that receives the network attachment definition."""
        return self.spec.network_namespace or self.metadata.namespace

    def render_data(self, resource_prefix: str | None = None) -> dict[str, Any]:
        """Template values for the sriov CNI configuration.

        Without a resource prefix the RESOURCE_PREFIX environment variable is used.
        """
        spec = self.spec
        data = _common_data(
            "sriov",
            self.metadata.name,
            self.target_namespace(),
            spec.resource_name,
            resource_prefix,
            spec.capabilities,
            spec.link_state,
            spec.ipam,
            spec.meta_plugins_config,
        )
        data["SriovCniVlan"] = spec.vlan

        if 0 <= spec.vlan_qos <= 7:
            data["VlanQoSConfigured"] = True
            data["SriovCniVlanQoS"] = spec.vlan_qos
        else:
            data["VlanQoSConfigured"] = False

        if spec.spoof_chk in _ON_OFF:
            data["SpoofChkConfigured"] = True
            data["SriovCniSpoofChk"] = spec.spoof_chk
        else:
            data["SpoofChkConfigured"] = False

        if spec.trust in _ON_OFF:
            data["TrustConfigured"] = True
            data["SriovCniTrust"] = spec.trust
        else:
            data["TrustConfigured"] = False

        data["MinTxRateConfigured"] = False
        if spec.min_tx_rate is not None and spec.min_tx_rate >= 0:
            data["MinTxRateConfigured"] = True
            data["SriovCniMinTxRate"] = spec.min_tx_rate

        data["MaxTxRateConfigured"] = False
        if spec.max_tx_rate is not None and spec.max_tx_rate >= 0:
            data["MaxTxRateConfigured"] = True
            data["SriovCniMaxTxRate"] = spec.max_tx_rate

        log.info("render data for sriov network %s", self.metadata.name)
        return data


@dataclass
class SriovIBNetworkSpec:
    """Desired state of an InfiniBand SR-IOV network."""

    resource_name: str = ""
    network_namespace: str = ""
    capabilities: str = ""
    ipam: str = ""
    link_state: str = ""
    meta_plugins_config: str = ""


@dataclass
class SriovIBNetwork:
    """An InfiniBand SR-IOV network rendered into a network attachment definition."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovIBNetworkSpec = field(default_factory=SriovIBNetworkSpec)

    def target_namespace(self) -> str:
        """Namespace that receives the network attachment definition."""
        return self.spec.network_namespace or self.metadata.namespace

    def render_data(self, resource_prefix: str | None = None) -> dict[str, Any]:
        """Template values for the ib-sriov CNI configuration.

        Without a resource prefix the RESOURCE_PREFIX environment variable is used.
        """
        spec = self.spec
        log.info("render data for ib sriov network %s", self.metadata.name)
        return _common_data(
            "ib-sriov",
            self.metadata.name,
            self.target_namespace(),
            spec.resource_name,
            resource_prefix,
            spec.capabilities,
            spec.link_state,
            spec.ipam,
            spec.meta_plugins_config,
        )