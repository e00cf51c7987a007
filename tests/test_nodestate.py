import pytest

from sriovnet.nodestate import (
    INVALID_VF_INDEX,
    Interface,
    InterfaceExt,
    SriovNetworkNodeState,
    SriovNetworkNodeStateStatus,
    VfGroup,
    index_in_range,
    parse_pf_name,
    parse_range,
)


def test_parse_range():
    assert parse_range("0-1") == (0, 1)
    assert parse_range("2-4") == (2, 4)


@pytest.mark.parametrize("bad", ["a-c", "1", "", "1-x"])
def test_parse_range_errors(bad):
    with pytest.raises(ValueError):
        parse_range(bad)


def test_index_in_range():
    assert index_in_range(0, "0-1")
    assert index_in_range(1, "0-1")
    assert not index_in_range(2, "0-1")
    assert not index_in_range(0, "bad")


def test_parse_pf_name():
    assert parse_pf_name("ens803f0#2-4") == ("ens803f0", 2, 4)
    assert parse_pf_name("ens803f1") == ("ens803f1", INVALID_VF_INDEX, INVALID_VF_INDEX)
    assert INVALID_VF_INDEX == -1


def test_parse_pf_name_bad_partition():
    with pytest.raises(ValueError):
        parse_pf_name("ens803f0#a-c")


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("0-1", "0-1", True),
        ("0-0", "0-1", True),
        ("1-1", "0-1", True),
        ("2-4", "0-1", False),
        ("0-1", "2-3", False),
        ("0-5", "2-3", True),
        ("bad", "0-1", False),
    ],
)
def test_overlaps(a, b, expected):
    assert VfGroup(vf_range=a).overlaps(VfGroup(vf_range=b)) is expected
    assert VfGroup(vf_range=b).overlaps(VfGroup(vf_range=a)) is expected


def _incoming():
    return Interface(
        name="ens803f1",
        num_vfs=2,
        pci_address="0000:86:00.1",
        vf_groups=[
            VfGroup(
                device_type="netdevice",
                resource_name="p1res",
                vf_range="0-1",
                policy_name="p1",
            )
        ],
    )


def test_merge_different_priority_overlap_keeps_incoming():
    existing = Interface(
        name="ens803f1",
        num_vfs=3,
        pci_address="0000:86:00.1",
        vf_groups=[VfGroup("vfiores", "vfio-pci", "0-1", "p2")],
    )
    incoming = _incoming()
    existing.merge_configs(incoming, False)
    assert incoming.num_vfs == 2
    assert [g.resource_name for g in incoming.vf_groups] == ["p1res"]


def test_merge_equal_priority_overlap_merges_sizes():
    existing = Interface(
        name="ens803f1",
        num_vfs=3,
        mtu=2000,
        pci_address="0000:86:00.1",
        vf_groups=[VfGroup("vfiores", "vfio-pci", "0-1", "p2")],
    )
    incoming = _incoming()
    existing.merge_configs(incoming, True)
    assert incoming.mtu == 2000
    assert incoming.num_vfs == 3
    assert len(incoming.vf_groups) == 1


def test_merge_non_overlapping_groups_appended():
    existing = Interface(
        name="ens803f1",
        num_vfs=4,
        pci_address="0000:86:00.1",
        vf_groups=[VfGroup("p2res", "vfio-pci", "2-3", "p2")],
    )
    incoming = _incoming()
    existing.merge_configs(incoming, False)
    assert incoming.num_vfs == 4
    assert incoming.vf_groups[1] == VfGroup("p2res", "vfio-pci", "2-3", "p2")


def test_merge_same_resource_name_dropped():
    existing = Interface(
        num_vfs=4,
        vf_groups=[VfGroup("p1res", "vfio-pci", "2-3", "p2")],
    )
    incoming = _incoming()
    existing.merge_configs(incoming, True)
    assert incoming.vf_groups == _incoming().vf_groups
    assert incoming.num_vfs == 4


def test_state_lookup_by_pci_address():
    state = SriovNetworkNodeState(
        status=SriovNetworkNodeStateStatus(
            interfaces=[
                InterfaceExt(pci_address="0000:86:00.0", name="ens803f0", driver="i40e"),
                InterfaceExt(pci_address="0000:86:00.1", name="ens803f1", driver="mlx5_core"),
            ]
        )
    )
    found = state.interface_status("0000:86:00.1")
    assert found is not None and found.name == "ens803f1"
    assert state.interface_status("0000:00:00.0") is None
    assert state.driver_for("0000:86:00.0") == "i40e"
    assert state.driver_for("0000:00:00.0") == ""