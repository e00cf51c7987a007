import pytest

from sriovnet.nicids import (
    NetFilterType,
    NicIdMap,
    is_enabled_unsupported_vendor,
    is_valid_pci_string,
    net_filter_match,
    remove_string,
    unique_append,
)


@pytest.fixture
def nic_map():
    return NicIdMap(["8086 158b 154c", "15b3 1015 1016", "8086 1572 154c"])


def test_net_filter_type_string_used_in_filter():
    flt = f"{NetFilterType.OPENSTACK_NETWORK_ID}:abc"
    assert net_filter_match(flt, "openstack/NetworkID:abc") is True
    assert net_filter_match(flt, "other/NetworkID:abc") is False


def test_load_appends_config_map_values():
    m = NicIdMap(["8086 158b 154c"])
    m.load({"Intel_a": "8086 1572 154c", "Mlx": "15b3 1015 1016"})
    assert m.entries == ["8086 158b 154c", "8086 1572 154c", "15b3 1015 1016"]


def test_supported_vendor_and_device(nic_map):
    assert nic_map.is_supported_vendor("8086")
    assert not nic_map.is_supported_vendor("abcd")
    assert nic_map.is_supported_device("1015")
    assert not nic_map.is_supported_device("154c")


def test_supported_models(nic_map):
    assert nic_map.is_supported_model("8086", "158b")
    assert not nic_map.is_supported_model("15b3", "158b")
    assert nic_map.is_vf_supported_model("15b3", "1016")
    assert not nic_map.is_vf_supported_model("15b3", "1015")


def test_supported_vf_ids_unique_and_sorted(nic_map):
    ids = nic_map.supported_vf_ids()
    assert len(ids) == len(set(ids))
    assert set(ids) == {"0x154c", "0x1016"}
    assert [int(x, 16) for x in ids] == sorted(int(x, 16) for x in ids)


def test_vf_device_id(nic_map):
    assert nic_map.vf_device_id("1015") == "1016"
    assert nic_map.vf_device_id("ffff") == ""


def test_empty_map_supports_nothing():
    m = NicIdMap()
    assert not m.is_supported_vendor("8086")
    assert m.supported_vf_ids() == []


@pytest.mark.parametrize(
    "text, expected",
    [
        ("8086 158b 154c", True),
        ("8086 158b", False),
        ("808 158b 154c", False),
        ("8086 158 154c", False),
        ("8086 158b 154", False),
        ("zzzz 158b 154c", True),
    ],
)
def test_is_valid_pci_string(text, expected):
    assert is_valid_pci_string(text) is expected


def test_is_enabled_unsupported_vendor():
    data = {"a": "1af4 1000 1041", "b": "bad"}
    assert is_enabled_unsupported_vendor("1af4", data)
    assert not is_enabled_unsupported_vendor("bad", data)


def test_remove_string():
    result, found = remove_string("b", ["a", "b", "c", "b"])
    assert result == ["a", "c"]
    assert found is True
    result, found = remove_string("z", ["a"])
    assert result == ["a"]
    assert found is False
    assert remove_string("a", []) == ([], False)


def test_unique_append_does_not_mutate():
    base = ["a"]
    assert unique_append(base, "b", "a", "b") == ["a", "b"]
    assert base == ["a"]


@pytest.mark.parametrize(
    "flt, value, expected",
    [
        ("openstack/NetworkID:abc", "openstack/NetworkID:abc", True),
        ("openstack/NetworkID:abc", "  openstack/NetworkID : abc", True),
        ("openstack/NetworkID:abc", "openstack/NetworkID:def", False),
        ("nofilter", "openstack/NetworkID:abc", False),
        ("openstack/NetworkID:abc", "", False),
    ],
)
def test_net_filter_match(flt, value, expected):
    assert net_filter_match(flt, value) is expected