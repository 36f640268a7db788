from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from .naming import normalize_class_name, to_pascal_case

if TYPE_CHECKING:
    from .gir.model import NormalizedNamespace, NormalizedRecord

INTERNAL_RECORD_SUFFIXES = ("Class", "Private", "Iface")


@dataclass(frozen=True)
class RegisteredType:
    namespace: str
    name: str
    kind: str
    transformed_name: str
    glib_type_name: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        return f"{self.namespace}.{self.name}"


class TypeRegistry:
    def __init__(self):
        self._entries: OrderedDict[str, RegisteredType] = OrderedDict()

    @classmethod
    def from_namespaces(cls, namespaces: Iterable[NormalizedNamespace]) -> TypeRegistry:
        registry = cls()
        for ns in namespaces:
            for c in ns.classes.values():
                registry.register(ns.name, c.name, "class", c.glib_type_name)
            for i in ns.interfaces.values():
                registry.register(ns.name, i.name, "interface", i.glib_type_name)
            for e in ns.enumerations.values():
                registry.register(ns.name, e.name, "enum", e.glib_type_name)
            for e in ns.bitfields.values():
                registry.register(ns.name, e.name, "flags", e.glib_type_name)
            for r in ns.records.values():
                if is_bindable_record(r):
                    registry.register(ns.name, r.name, "record", r.glib_type_name)
        return registry

    def register(self, namespace: str, name: str, kind: str, glib_type_name: Optional[str] = None) -> RegisteredType:
        if kind in ("enum", "flags"):
            transformed_name = to_pascal_case(name)
        else:
            transformed_name = normalize_class_name(name, namespace)
        entry = RegisteredType(namespace, name, kind, transformed_name, glib_type_name)
        self._entries[entry.qualified_name] = entry
        return entry

    def resolve(self, qualified_name: str) -> Optional[RegisteredType]:
        return self._entries.get(qualified_name)

    def resolve_in_namespace(self, name: str, context_namespace: str) -> Optional[RegisteredType]:
        if "." in name:
            return self.resolve(name)
        return self.resolve(f"{context_namespace}.{name}")

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries.values())


def is_bindable_record(record: NormalizedRecord) -> bool:
    if record.glib_type_name is None or record.disguised:
        return False
    return not record.name.endswith(INTERNAL_RECORD_SUFFIXES)
