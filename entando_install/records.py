from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

Record = Dict[str, Any]


@dataclass(frozen=True)
class ResourceRef:
    api_version: str
    kind: str
    name: str
    namespace: Optional[str] = None

    @classmethod
    def of(cls, record: Record) -> "ResourceRef":
        meta = record.get("metadata") or {}
        return cls(
            api_version=record.get("apiVersion", "v1"),
            kind=record["kind"],
            name=meta.get("name", ""),
            namespace=meta.get("namespace"),
        )

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.kind} '{self.name}' in namespace '{self.namespace}'"
        return f"{self.kind} '{self.name}'"


def is_resource(doc: Any) -> bool:
    """A parsed document counts as a resource only if it has a kind and a named metadata mapping."""
    if not isinstance(doc, dict) or not doc.get("kind"):
        return False
    meta = doc.get("metadata")
    return isinstance(meta, dict) and bool(meta.get("name"))


def valid_records(docs: Iterable[Any]) -> List[Record]:
    return [d for d in docs if is_resource(d)]


def default_namespace(record: Record, namespace: str) -> None:
    meta = record["metadata"]
    if not meta.get("namespace"):
        meta["namespace"] = namespace
