"""Operator-wide and pool configuration resources."""

from __future__ import annotations

from dataclasses import dataclass, field

from .schema import ObjectMeta

POOL_CONFIG_FINALIZER_NAME = "poolconfig.finalizers.sriovnetwork.openshift.io"

MIN_LOG_LEVEL = 0
MAX_LOG_LEVEL = 2


@dataclass
class OvsHardwareOffloadConfig:
    """OVS hardware offload settings for a named pool of nodes."""

    name: str = ""


@dataclass
class SriovNetworkPoolConfigSpec:
    ovs_hardware_offload_config: OvsHardwareOffloadConfig = field(
        default_factory=OvsHardwareOffloadConfig
    )


@dataclass
class SriovNetworkPoolConfig:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovNetworkPoolConfigSpec = field(default_factory=SriovNetworkPoolConfigSpec)


@dataclass
class SriovOperatorConfigSpec:
    """Desired operator configuration."""

    config_daemon_node_selector: dict[str, str] = field(default_factory=dict)
    enable_injector: bool | None = None
    enable_operator_webhook: bool | None = None
    log_level: int = 0
    disable_drain: bool = False
    enable_ovs_offload: bool = False

    def validate(self) -> None:
        """Raise ValueError if the log level is outside 0..2."""
        if not MIN_LOG_LEVEL <= self.log_level <= MAX_LOG_LEVEL:
            raise ValueError(
                f"logLevel must be between {MIN_LOG_LEVEL} and {MAX_LOG_LEVEL}, "
                f"got {self.log_level}"
            )


@dataclass
class SriovOperatorConfigStatus:
    injector: str = ""
    operator_webhook: str = ""


@dataclass
class SriovOperatorConfig:
    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: SriovOperatorConfigSpec = field(default_factory=SriovOperatorConfigSpec)
    status: SriovOperatorConfigStatus = field(default_factory=SriovOperatorConfigStatus)