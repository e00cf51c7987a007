"""Node policies: NIC selection and application to a node state."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .nicids import net_filter_match
from .nodestate import (
    INVALID_VF_INDEX,
    Interface,
    InterfaceExt,
    SriovNetworkNodeState,
    VfGroup,
    parse_pf_name,
)
from .schema import ObjectMeta

log = logging.getLogger(__name__)


@dataclass
class Node:
    """The parts of a cluster node that policies select on."""

    name: str = ""
    labels: dict[str, str] = field(default_factory=dict)


def _pf_base_name(pf_name: str) -> str:
    return pf_name.split("#")[0] if "#" in pf_name else pf_name


@dataclass
class SriovNetworkNicSelector:
    """Criteria a physical function must meet to be configured."""

    vendor: str = ""
    device_id: str = ""
    root_devices: list[str] = field(default_factory=list)
    pf_names: list[str] = field(default_factory=list)
    net_filter: str = ""

    def is_empty(self) -> bool:
        """Whether no criterion is set; an empty selector matches nothing."""
        return not (
            self.vendor
            or self.device_id
            or self.root_devices
            or self.pf_names
            or self.net_filter
        )

    def selects(self, iface: InterfaceExt) -> bool:
        """Whether the observed interface meets every criterion that is set."""
        if self.vendor and self.vendor != iface.vendor:
            return False
        if self.device_id and self.device_id != iface.device_id:
            return False
        if self.root_devices and iface.pci_address not in self.root_devices:
            return False
        if self.pf_names and iface.name not in {
            _pf_base_name(p) for p in self.pf_names
        }:
            return False
        if self.net_filter and not net_filter_match(self.net_filter, iface.net_filter):
            return False
        return True


@dataclass
class SriovNetworkNodePolicySpec:
    """Desired configuration that a policy applies to selected NICs."""

    resource_name: str = ""
    node_selector: dict[str, str] = field(default_factory=dict)
    priority: int = 0
    mtu: int = 0
    num_vfs: int = 0
    nic_selector: SriovNetworkNicSelector = field(
        default_factory=SriovNetworkNicSelector
    )
    device_type: str = ""
    is_rdma: bool = False
    need_vhost_net: bool = False
    link_type: str = ""
    eswitch_mode: str = ""


@dataclass
class SriovNetworkNodePolicy:
    """A policy that configures SR-IOV on the NICs of selected nodes."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovNetworkNodePolicySpec = field(
        default_factory=SriovNetworkNodePolicySpec
    )

    @property
    def name(self) -> str:
        return self.metadata.name

    def selects_node(self, node: Node) -> bool:
        """Whether every label in the node selector is set on the node."""
        for key, value in self.spec.node_selector.items():
            if node.labels.get(key) != value:
                return False
        log.info("policy %s selects node %s", self.name, node.name)
        return True

    def priority_key(self) -> tuple[int, str]:
        """Sort key: higher priority first, then by name."""
        return (-self.spec.priority, self.name)

    def generate_vf_group(self, iface: InterfaceExt) -> VfGroup:
        """Build the VF group this policy assigns on the interface.

        Raises ValueError if a PF name carries a malformed VF range.
        """
        start, end = 0, self.spec.num_vfs - 1
        for selector in self.spec.nic_selector.pf_names:
            try:
                pf_name, rng_start, rng_end = parse_pf_name(selector)
            except ValueError:
                log.error("unable to parse PF name %s", selector)
                raise
            if pf_name == iface.name:
                if rng_start != INVALID_VF_INDEX or rng_end != INVALID_VF_INDEX:
                    start, end = rng_start, rng_end
                break
        return VfGroup(
            resource_name=self.spec.resource_name,
            device_type=self.spec.device_type,
            vf_range=f"{start}-{end}",
            policy_name=self.name,
            mtu=self.spec.mtu,
            is_rdma=self.spec.is_rdma,
        )

    def apply(self, state: SriovNetworkNodeState, equal_priority: bool) -> None:
        """Apply the policy to the desired interfaces of a node state.

        Raises ValueError if a PF name carries a malformed VF range.
        """
        selector = self.spec.nic_selector
        if selector.is_empty():
            return
        for iface in state.status.interfaces:
            if not selector.selects(iface):
                continue
            log.info("update interface %s", iface.name)
            if self.spec.num_vfs <= 0:
                continue
            result = Interface(
                pci_address=iface.pci_address,
                mtu=self.spec.mtu,
                name=iface.name,
                link_type=self.spec.link_type,
                eswitch_mode=self.spec.eswitch_mode,
                num_vfs=self.spec.num_vfs,
                vf_groups=[self.generate_vf_group(iface)],
            )
            interfaces = state.spec.interfaces
            for index, existing in enumerate(interfaces):
                if existing.pci_address == result.pci_address:
                    existing.merge_configs(result, equal_priority)
                    interfaces[index] = result
                    break
            else:
                interfaces.append(result)


def sort_by_priority(
    policies: Iterable[SriovNetworkNodePolicy],
) -> list[SriovNetworkNodePolicy]:
    """Policies ordered by descending priority, then by name."""
    return sorted(policies, key=SriovNetworkNodePolicy.priority_key)