from __future__ import annotations
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, PrivateAttr

from docs_client.request import Transport, get_client

ResourceT = TypeVar("ResourceT", bound="Resource")


class Resource(BaseModel):
    """
    Generic Docs API resource.
    No declared fields: every key of the payload becomes an attribute and
    nothing else does. Subclasses add the endpoints of a concrete entity.
    Keys named like a BaseModel member (json, copy, schema, ...) are kept but
    only reachable through resource["json"] or to_dict().
    """
    model_config = ConfigDict(extra="allow")   # the API decides the schema

    _transport: Optional[Transport] = PrivateAttr(default=None)

    @classmethod
    def from_payload(
        cls: type[ResourceT],
        data: Mapping[str, Any],
        transport: Transport | None = None,
    ) -> ResourceT:
        resource = cls.model_validate(dict(data))
        resource._transport = transport
        return resource

    @classmethod
    def many(
        cls: type[ResourceT],
        items: Iterable[Mapping[str, Any]] | None,
        transport: Transport | None = None,
    ) -> list[ResourceT]:
        return project_many(items, lambda item: cls.from_payload(item, transport))

    def _client(self) -> Transport:
        """Transport this resource came through, falling back to the default client."""
        return self._transport or get_client()

    def to_dict(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def __getitem__(self, key: str) -> Any:
        # Reaches fields whose names are shadowed by BaseModel members (json, copy, schema, ...)
        return (self.model_extra or {})[key]

    def get(self, key: str, default: Any = None) -> Any:
        return (self.model_extra or {}).get(key, default)

    def __eq__(self, other: object) -> bool:
        # Same type and same fields; the transport is not part of the identity
        if not isinstance(other, Resource):
            return NotImplemented
        return type(self) is type(other) and self.to_dict() == other.to_dict()


def project_many(
    items: Iterable[Mapping[str, Any]] | None,
    factory: Callable[[Mapping[str, Any]], ResourceT],
) -> list[ResourceT]:
    """Map a list payload into resources, one per element, keeping the server order."""
    return [factory(item) for item in items or []]
