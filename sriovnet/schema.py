"""API group identity and object metadata for the sriovnetwork resources."""

from __future__ import annotations

from dataclasses import dataclass, field

GROUP = "sriovnetwork.openshift.io"
VERSION = "v1"


@dataclass(frozen=True)
class GroupResource:
    """A resource qualified by its API group."""

    group: str
    resource: str

    def __str__(self) -> str:
        if not self.group:
            return self.resource
        return f"{self.resource}.{self.group}"


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group."""

    group: str
    kind: str

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with its version."""

    group: str
    version: str

    def with_resource(self, resource: str) -> GroupResource:
        """Qualify an unqualified resource name with this group."""
        return GroupResource(group=self.group, resource=resource)

    def with_kind(self, kind: str) -> GroupKind:
        """Qualify an unqualified kind with this group."""
        return GroupKind(group=self.group, kind=kind)

    def __str__(self) -> str:
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group=GROUP, version=VERSION)


@dataclass
class ObjectMeta:
    """The metadata every stored object carries."""

    name: str = ""
    namespace: str = ""
    generate_name: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    finalizers: list[str] = field(default_factory=list)


def resource(resource: str) -> GroupResource:
    """Return the group-qualified form of an unqualified resource."""
    return GROUP_VERSION.with_resource(resource)


def kind(kind: str) -> GroupKind:
    """Return the group-qualified form of an unqualified kind."""
    return GROUP_VERSION.with_kind(kind)