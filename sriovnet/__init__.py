"""SR-IOV network resource models, policy merging, NIC id tables and CNI render data."""

__version__ = "0.1.0"

__all__ = ["config", "networks", "nicids", "nodestate", "policy", "schema"]