"""Supported NIC identifiers and small matching helpers."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from enum import IntEnum

log = logging.getLogger(__name__)

SUPPORTED_NIC_ID_CONFIGMAP = "supported-nic-ids"

_NET_FILTER_RE = re.compile(r"^\s*([^\s]+)\s*:\s*([^\s]+)", re.MULTILINE)


class NetFilterType(IntEnum):
    """Tags used by infrastructure network filters."""

    OPENSTACK_NETWORK_ID = 0

    def __str__(self) -> str:
        if self is NetFilterType.OPENSTACK_NETWORK_ID:
            return "openstack/NetworkID"
        return str(int(self))


def _fields(entry: str) -> list[str]:
    return entry.split(" ")


def _field(entry: str, index: int) -> str | None:
    ids = _fields(entry)
    return ids[index] if len(ids) > index else None


def _int_or_zero(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError:
        return 0


class NicIdMap:
    """Supported NIC models, each "vendor pf-device vf-device"."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self.entries: list[str] = list(entries)

    def load(self, data: Mapping[str, str]) -> None:
        """Add every entry held in a config map's data."""
        self.entries.extend(data.values())

    def is_supported_vendor(self, vendor_id: str) -> bool:
        return any(_field(n, 0) == vendor_id for n in self.entries)

    def is_supported_device(self, device_id: str) -> bool:
        return any(_field(n, 1) == device_id for n in self.entries)

    def is_supported_model(self, vendor_id: str, device_id: str) -> bool:
        if any(
            _field(n, 0) == vendor_id and _field(n, 1) == device_id
            for n in self.entries
        ):
            return True
        log.info(
            "unsupported model: vendorId %s deviceId %s", vendor_id, device_id
        )
        return False

    def is_vf_supported_model(self, vendor_id: str, device_id: str) -> bool:
        if any(
            _field(n, 0) == vendor_id and _field(n, 2) == device_id
            for n in self.entries
        ):
            return True
        log.info(
            "unsupported VF model: vendorId %s deviceId %s", vendor_id, device_id
        )
        return False

    def supported_vf_ids(self) -> list[str]:
        """Distinct VF device ids as "0x"-prefixed strings, numerically sorted."""
        vf_ids: list[str] = []
        for entry in self.entries:
            vf = _field(entry, 2)
            if vf is None:
                continue
            vf_id = "0x" + vf
            if vf_id not in vf_ids:
                vf_ids.append(vf_id)
        return sorted(vf_ids, key=_int_or_zero)

    def vf_device_id(self, device_id: str) -> str:
        """The VF device id for a PF device id, or "" if unknown."""
        for entry in self.entries:
            if _field(entry, 1) == device_id:
                return _field(entry, 2) or ""
        return ""


def is_valid_pci_string(nic_id_string: str) -> bool:
    """Check a "vendor pf-device vf-device" string of three 4-char ids."""
    ids = _fields(nic_id_string)
    if len(ids) != 3:
        log.info("invalid nic id string: %s", nic_id_string)
        return False
    labels = ("vendor PciId", "PciId of PF", "PciId of VF")
    for label, value in zip(labels, ids):
        if len(value) != 4:
            log.info("invalid %s %s", label, value)
            return False
        try:
            int(value, 16)
        except ValueError:
            log.info("invalid %s %s", label, value)
    return True


def is_enabled_unsupported_vendor(
    vendor_id: str, unsupported_nic_id_map: Mapping[str, str]
) -> bool:
    return any(
        is_valid_pci_string(n) and _fields(n)[0] == vendor_id
        for n in unsupported_nic_id_map.values()
    )


def remove_string(s: str, items: Iterable[str]) -> tuple[list[str], bool]:
    """Return the items without s, and whether s was present."""
    result = [item for item in items if item != s]
    items = list(items) if not isinstance(items, list) else items
    return result, len(result) != len(items)


def unique_append(items: Iterable[str], *args: str) -> list[str]:
    """Return items extended by each argument not already present."""
    result = list(items)
    for s in args:
        if s not in result:
            result.append(s)
    return result


def net_filter_match(net_filter: str, net_value: str) -> bool:
    """Check that a "key:value" filter matches a "key:value" net value."""
    filter_match = _NET_FILTER_RE.search(net_filter)
    if filter_match is None:
        log.info("invalid NetFilter spec: %s", net_filter)
        return False
    value_match = _NET_FILTER_RE.search(net_value)
    if value_match is None:
        log.info("invalid netValue: %s", net_value)
        return False
    return filter_match.groups() == value_match.groups()