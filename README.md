# sriovnet

Data models and logic for describing SR-IOV networking: which NICs a
policy selects, how virtual functions (VFs) are partitioned into groups,
how several policies merge into one node's desired state, and what
values a network's CNI configuration is filled from.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `sriovnet.schema`: the API group and version (`GroupVersion`,
  `GroupResource`, `GroupKind`, `GROUP_VERSION`), the helpers
  `resource()` and `kind()` that qualify a name with the
  `sriovnetwork.openshift.io` group, and `ObjectMeta` (name, namespace,
  labels, annotations, finalizers).
- `sriovnet.nicids`: `NicIdMap`, a table of supported
  "vendor PF-device VF-device" id strings. `load()` adds the values of a
  mapping; lookups include `is_supported_vendor()`,
  `is_supported_device()`, `is_supported_model()`,
  `is_vf_supported_model()`, `vf_device_id()` and `supported_vf_ids()`
  (distinct VF ids as `0x`-prefixed strings, numerically sorted). Also
  `is_valid_pci_string()`, `is_enabled_unsupported_vendor()`,
  `net_filter_match()` (compares the first `key:value` pair of a filter
  and a value), `remove_string()` (returns the remaining items and whether
  the string was found), `unique_append()`, and the `NetFilterType` enum.
- `sriovnet.nodestate`: `SriovNetworkNodeState` with its spec and
  status, `Interface`, `InterfaceExt`, `VfGroup`, `VirtualFunction`, and
  range parsing: `parse_range()`, `index_in_range()` and
  `parse_pf_name()`. `VfGroup.overlaps()` tells whether two VF ranges
  overlap; `Interface.merge_configs()` merges an existing interface's
  groups into a newer one. `interface_status()` and `driver_for()` look up
  an observed interface by PCI address.
- `sriovnet.policy`: `SriovNetworkNodePolicy` with its spec and
  `SriovNetworkNicSelector`, a `Node` (name and labels) for
  `selects_node()`, and `sort_by_priority()`.
- `sriovnet.networks`: `SriovNetwork` and `SriovIBNetwork`. Their
  `render_data()` returns the dictionary of values a CNI config template
  is filled from; `target_namespace()` is the spec's network namespace or,
  if empty, the object's own namespace.
- `sriovnet.config`: `SriovNetworkPoolConfig`, `OvsHardwareOffloadConfig`
  and `SriovOperatorConfig`. `SriovOperatorConfigSpec.validate()` raises
  `ValueError` when the log level is outside 0 to 2.

## Example

```python
from sriovnet.schema import ObjectMeta
from sriovnet.nodestate import SriovNetworkNodeState, InterfaceExt
from sriovnet.policy import (
    SriovNetworkNodePolicy,
    SriovNetworkNodePolicySpec,
    SriovNetworkNicSelector,
)

state = SriovNetworkNodeState()
state.status.interfaces.append(
    InterfaceExt(name="ens1f0", pci_address="0000:3b:00.0", vendor="8086", device_id="158b")
)

policy = SriovNetworkNodePolicy(
    metadata=ObjectMeta(name="p1"),
    spec=SriovNetworkNodePolicySpec(
        resource_name="intelnics",
        num_vfs=4,
        nic_selector=SriovNetworkNicSelector(pf_names=["ens1f0#0-1"]),
        device_type="netdevice",
    ),
)

policy.apply(state, equal_priority=False)
for iface in state.spec.interfaces:
    print(iface.name, iface.num_vfs, [g.vf_range for g in iface.vf_groups])
# ens1f0 4 ['0-1']
```

## Applying policies

A selector with no criteria set selects nothing, and a policy with zero
VFs leaves the node state unchanged. A PF name may carry a VF range after
`#` (`ens1f0#2-4`); without one the group covers VFs `0` to `num_vfs - 1`.
A malformed range raises `ValueError`.

When a policy is applied to an interface already in the desired state,
the new policy's group comes first; existing groups are kept only if they
have a different resource name and a non-overlapping range. MTU and VF
count take the larger of the two values when `equal_priority` is true or
any existing group was kept.

`sort_by_priority()` orders policies by descending priority number, then
by name. Applying them in that order lets those with lower numbers, applied
later, take precedence.

## CNI render data

```python
from sriovnet.networks import SriovNetwork, SriovNetworkSpec
from sriovnet.schema import ObjectMeta

net = SriovNetwork(
    metadata=ObjectMeta(name="net1", namespace="default"),
    spec=SriovNetworkSpec(resource_name="intelnics", vlan=10, trust="on"),
)
data = net.render_data(resource_prefix="example.com")
print(data["SriovCniResourceName"], data["TrustConfigured"], data["SriovCniIpam"])
# example.com/intelnics True "ipam":{}
```

If `resource_prefix` is not given, the `RESOURCE_PREFIX` environment
variable is used. Whitespace is stripped from the IPAM configuration.

## What this package does not do

It holds the models and their logic only. It does not talk to a cluster,
does not fill templates into network attachment definitions, does not
configure NICs on a host, and provides no daemon, webhook server or
command-line program.