"""Reconciliation of Instance resources against an object store."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from .types import GROUP_VERSION, GroupVersion, Instance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Request:
    """Identifies one object by namespace and name."""

    name: str
    namespace: str = ""

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


@dataclass(frozen=True)
class Result:
    """Outcome of a reconciliation: whether and when to run again."""

    requeue: bool = False
    requeue_after: float = 0.0


class NotFoundError(LookupError):
    """Raised when a requested object does not exist in the store."""

    def __init__(self, request: Request) -> None:
        super().__init__(f"instance {request} not found")
        self.request = request


def _key(instance: Instance) -> Request:
    return Request(name=instance.metadata.name, namespace=instance.metadata.namespace)


class InstanceStore:
    """An in-memory store of Instance objects keyed by namespace and name."""

    def __init__(self) -> None:
        self._objects: dict[Request, Instance] = {}

    def __len__(self) -> int:
        return len(self._objects)

    def __contains__(self, request: object) -> bool:
        return request in self._objects

    def get(self, request: Request) -> Instance:
        """Return a copy of the stored object, or raise NotFoundError."""
        try:
            return copy.deepcopy(self._objects[request])
        except KeyError:
            raise NotFoundError(request) from None

    def create(self, instance: Instance) -> None:
        """Store a copy of a new object; its name must be set and unused."""
        if not instance.metadata.name:
            raise ValueError("instance must have a name")
        key = _key(instance)
        if key in self._objects:
            raise ValueError(f"instance {key} already exists")
        self._objects[key] = copy.deepcopy(instance)

    def delete(self, instance: Instance) -> None:
        """Remove the object with the given instance's identity."""
        key = _key(instance)
        if key not in self._objects:
            raise NotFoundError(key)
        del self._objects[key]


@dataclass
class InstanceReconciler:
    """Brings the state of Instance objects towards what their spec asks for."""

    store: InstanceStore
    group_version: GroupVersion = field(default=GROUP_VERSION)
    name: str = "instance"

    def reconcile(self, request: Request) -> Result:
        """Handle one reconciliation request; no further work is scheduled."""
        logger.debug(
            "reconciling %s %s", self.group_version.api_version(), request
        )
        return Result()