"""Schema types of the Instance custom resource in the prova.prova/v1alpha1 group."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


@dataclass(frozen=True)
class GroupVersion:
    """An API group together with one of its versions."""

    group: str
    version: str

    def api_version(self) -> str:
        """Return the ``apiVersion`` string used in serialized objects."""
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"


GROUP_VERSION = GroupVersion(group="prova.prova", version="v1alpha1")
INSTANCE_KIND = "Instance"
INSTANCE_LIST_KIND = "InstanceList"


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{what} must be a mapping, got {type(data).__name__}")
    return data


def _check_type_meta(data: Mapping[str, Any], kind: str) -> None:
    found_kind = data.get("kind")
    if found_kind and found_kind != kind:
        raise ValueError(f"expected kind {kind!r}, got {found_kind!r}")
    found_version = data.get("apiVersion")
    expected_version = GROUP_VERSION.api_version()
    if found_version and found_version != expected_version:
        raise ValueError(
            f"expected apiVersion {expected_version!r}, got {found_version!r}"
        )


def _string_map(data: Any, what: str) -> dict[str, str]:
    if data is None:
        return {}
    mapping = _require_mapping(data, what)
    return {str(key): str(value) for key, value in mapping.items()}


@dataclass
class ObjectMeta:
    """Identity and bookkeeping data attached to every stored object."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    resource_version: str = ""
    uid: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out empty fields."""
        result: dict[str, Any] = {}
        if self.name:
            result["name"] = self.name
        if self.namespace:
            result["namespace"] = self.namespace
        if self.uid:
            result["uid"] = self.uid
        if self.resource_version:
            result["resourceVersion"] = self.resource_version
        if self.labels:
            result["labels"] = dict(self.labels)
        if self.annotations:
            result["annotations"] = dict(self.annotations)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ObjectMeta:
        """Build from a serialized mapping; missing fields take their defaults."""
        if data is None:
            return cls()
        data = _require_mapping(data, "metadata")
        return cls(
            name=str(data.get("name", "")),
            namespace=str(data.get("namespace", "")),
            labels=_string_map(data.get("labels"), "labels"),
            annotations=_string_map(data.get("annotations"), "annotations"),
            resource_version=str(data.get("resourceVersion", "")),
            uid=str(data.get("uid", "")),
        )


@dataclass
class InstanceSpec:
    """Desired state of an Instance."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out an empty name."""
        return {"name": self.name} if self.name else {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> InstanceSpec:
        """Build from a serialized mapping."""
        if data is None:
            return cls()
        data = _require_mapping(data, "spec")
        return cls(name=str(data.get("name", "")))


@dataclass
class InstanceStatus:
    """Observed state of an Instance; it carries no fields yet."""

    def to_dict(self) -> dict[str, Any]:
        """Serialize to an empty mapping."""
        return {}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> InstanceStatus:
        """Build from a serialized mapping; any content is ignored."""
        if data is not None:
            _require_mapping(data, "status")
        return cls()


@dataclass
class Instance:
    """The Instance custom resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    spec: InstanceSpec = field(default_factory=InstanceSpec)
    status: InstanceStatus = field(default_factory=InstanceStatus)

    @property
    def api_version(self) -> str:
        return GROUP_VERSION.api_version()

    @property
    def kind(self) -> str:
        return INSTANCE_KIND

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the resource's wire form."""
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata.to_dict(),
            "spec": self.spec.to_dict(),
            "status": self.status.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Instance:
        """Build from the wire form, rejecting a foreign kind or apiVersion."""
        data = _require_mapping(data, "instance")
        _check_type_meta(data, INSTANCE_KIND)
        return cls(
            metadata=ObjectMeta.from_dict(data.get("metadata")),
            spec=InstanceSpec.from_dict(data.get("spec")),
            status=InstanceStatus.from_dict(data.get("status")),
        )


@dataclass
class InstanceList:
    """A list of Instance resources."""

    items: list[Instance] = field(default_factory=list)
    resource_version: str = ""

    @property
    def api_version(self) -> str:
        return GROUP_VERSION.api_version()

    @property
    def kind(self) -> str:
        return INSTANCE_LIST_KIND

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the list's wire form; ``items`` is always present."""
        metadata = {"resourceVersion": self.resource_version} if self.resource_version else {}
        return {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": metadata,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InstanceList:
        """Build from the wire form, rejecting a foreign kind or apiVersion."""
        data = _require_mapping(data, "instance list")
        _check_type_meta(data, INSTANCE_LIST_KIND)
        metadata = data.get("metadata") or {}
        metadata = _require_mapping(metadata, "metadata")
        raw_items = data.get("items") or []
        if not isinstance(raw_items, list):
            raise TypeError(f"items must be a list, got {type(raw_items).__name__}")
        return cls(
            items=[Instance.from_dict(item) for item in raw_items],
            resource_version=str(metadata.get("resourceVersion", "")),
        )