"""Node state resource: interfaces, VF groups and range handling."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace

from .schema import ObjectMeta

INVALID_VF_INDEX = -1

_INT_RE = re.compile(r"[+-]?\d+")


def _atoi(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_range(rng: str) -> tuple[int, int]:
    """Parse a VF range "start-end"; raise ValueError if malformed."""
    parts = rng.split("-")
    start = _atoi(parts[0])
    if len(parts) < 2:
        raise ValueError(f"invalid VF range: {rng!r}")
    return start, _atoi(parts[1])


def index_in_range(i: int, rng: str) -> bool:
    """Whether index i lies within range rng; False for a malformed range."""
    try:
        start, end = parse_range(rng)
    except ValueError:
        return False
    return start <= i <= end


def parse_pf_name(name: str) -> tuple[str, int, int]:
    """Split "pf#start-end" into name and range; -1 bounds when no range."""
    if "#" in name:
        fields = name.split("#")
        start, end = parse_range(fields[1])
        return fields[0], start, end
    return name, INVALID_VF_INDEX, INVALID_VF_INDEX


@dataclass
class VfGroup:
    resource_name: str = ""
    device_type: str = ""
    vf_range: str = ""
    policy_name: str = ""
    mtu: int = 0
    is_rdma: bool = False

    def overlaps(self, other: VfGroup) -> bool:
        """Whether the VF ranges of the two groups overlap."""
        try:
            start, _ = parse_range(self.vf_range)
            other_start, other_end = parse_range(other.vf_range)
        except ValueError:
            return False
        if start < other_start:
            return index_in_range(other_start, self.vf_range) or index_in_range(
                other_end, self.vf_range
            )
        _, end = parse_range(self.vf_range)
        return index_in_range(start, other.vf_range) or index_in_range(
            end, other.vf_range
        )


@dataclass
class Interface:
    pci_address: str = ""
    num_vfs: int = 0
    mtu: int = 0
    name: str = ""
    link_type: str = ""
    eswitch_mode: str = ""
    vf_groups: list[VfGroup] = field(default_factory=list)

    def merge_configs(self, incoming: Interface, equal_priority: bool) -> None:
        """Merge this interface's groups into incoming, which takes precedence.

        Groups sharing the resource name of, or overlapping, incoming's first
        group are dropped. MTU and VF count take the larger value when the
        priorities are equal or any group was kept.
        """
        first = incoming.vf_groups[0]
        merged = False
        for group in self.vf_groups:
            if group.resource_name == first.resource_name or group.overlaps(first):
                continue
            merged = True
            incoming.vf_groups.append(replace(group))

        if not equal_priority and not merged:
            return

        incoming.mtu = max(incoming.mtu, self.mtu)
        incoming.num_vfs = max(incoming.num_vfs, self.num_vfs)


@dataclass
class VirtualFunction:
    pci_address: str = ""
    vf_id: int = 0
    name: str = ""
    mac: str = ""
    assigned: str = ""
    driver: str = ""
    vendor: str = ""
    device_id: str = ""
    vlan: int = 0
    mtu: int = 0


@dataclass
class InterfaceExt:
    pci_address: str = ""
    name: str = ""
    mac: str = ""
    driver: str = ""
    vendor: str = ""
    device_id: str = ""
    net_filter: str = ""
    mtu: int = 0
    num_vfs: int = 0
    link_speed: str = ""
    link_type: str = ""
    eswitch_mode: str = ""
    total_vfs: int = 0
    vfs: list[VirtualFunction] = field(default_factory=list)


@dataclass
class SriovNetworkNodeStateSpec:
    dp_config_version: str = ""
    interfaces: list[Interface] = field(default_factory=list)


@dataclass
class SriovNetworkNodeStateStatus:
    interfaces: list[InterfaceExt] = field(default_factory=list)
    sync_status: str = ""
    last_sync_error: str = ""


@dataclass
class SriovNetworkNodeState:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovNetworkNodeStateSpec = field(default_factory=SriovNetworkNodeStateSpec)
    status: SriovNetworkNodeStateStatus = field(
        default_factory=SriovNetworkNodeStateStatus
    )

    def interface_status(self, pci_address: str) -> InterfaceExt | None:
        """The observed interface with this PCI address, if any."""
        return next(
            (i for i in self.status.interfaces if i.pci_address == pci_address),
            None,
        )

    def driver_for(self, pci_address: str) -> str:
        """The driver of the observed interface, or "" if not found."""
        iface = self.interface_status(pci_address)
        return iface.driver if iface is not None else ""