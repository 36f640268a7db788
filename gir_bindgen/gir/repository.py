from __future__ import annotations

import logging
import sys
from collections import OrderedDict
from typing import Callable, List, Optional

if sys.version_info >= (3, 8):
    from typing import Literal
else:
    from typing_extensions import Literal

from ..errors import RepositoryNotResolvedError
from ..type_registry import TypeRegistry
from .intrinsics import is_intrinsic_type
from .model import (NormalizedCallback, NormalizedClass, NormalizedConstant,
                    NormalizedEnumeration, NormalizedFunction,
                    NormalizedInterface, NormalizedNamespace, NormalizedRecord,
                    parse_qualified_name)
from .normalizer import TypeNameIndex, normalize_namespace
from .parser import RawNamespace, parse_gir

logger = logging.getLogger(__name__)

TypeKind = Literal["class", "interface", "record", "enum", "flags", "callback"]


class Repository:
    """
    Cross-namespace view over every loaded GIR document.

    Loading and linking are separate steps: call load_from_xml() once per
    document, in any order, then resolve() before issuing any query.
    """

    def __init__(self):
        self._raw_namespaces: OrderedDict[str, RawNamespace] = OrderedDict()
        self._namespaces: OrderedDict[str, NormalizedNamespace] = OrderedDict()
        self._resolved = False
        self._type_registry = None

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def load_from_xml(self, xml_text: str) -> RawNamespace:
        raw = parse_gir(xml_text)
        self._raw_namespaces[raw.name] = raw
        self._resolved = False
        self._type_registry = None
        logger.debug("loaded GIR namespace %s-%s", raw.name, raw.version)
        return raw

    def resolve(self) -> None:
        if self._resolved:
            return

        index = TypeNameIndex(self._raw_namespaces)
        namespaces = OrderedDict()
        for name, raw in self._raw_namespaces.items():
            namespaces[name] = normalize_namespace(raw, index)
        self._namespaces = namespaces

        for ns in namespaces.values():
            for cls in ns.classes.values():
                cls.repository = self
            for iface in ns.interfaces.values():
                iface.repository = self

        self._resolved = True
        logger.debug("resolved %d namespace(s): %s", len(namespaces), ", ".join(namespaces.keys()))

    @property
    def type_registry(self) -> TypeRegistry:
        self._ensure_resolved("type_registry")
        if self._type_registry is None:
            self._type_registry = TypeRegistry.from_namespaces(self._namespaces.values())
        return self._type_registry

    def get_namespace_names(self) -> List[str]:
        self._ensure_resolved("get_namespace_names")
        return list(self._namespaces.keys())

    def get_namespace(self, name: str) -> Optional[NormalizedNamespace]:
        self._ensure_resolved("get_namespace")
        return self._namespaces.get(name)

    def get_all_namespaces(self) -> OrderedDict[str, NormalizedNamespace]:
        self._ensure_resolved("get_all_namespaces")
        return OrderedDict(self._namespaces)

    def resolve_class(self, name: str) -> Optional[NormalizedClass]:
        return self._lookup("resolve_class", name, lambda ns: ns.classes)

    def resolve_interface(self, name: str) -> Optional[NormalizedInterface]:
        return self._lookup("resolve_interface", name, lambda ns: ns.interfaces)

    def resolve_record(self, name: str) -> Optional[NormalizedRecord]:
        return self._lookup("resolve_record", name, lambda ns: ns.records)

    def resolve_enum(self, name: str) -> Optional[NormalizedEnumeration]:
        return self._lookup("resolve_enum", name, lambda ns: ns.enumerations)

    def resolve_flags(self, name: str) -> Optional[NormalizedEnumeration]:
        return self._lookup("resolve_flags", name, lambda ns: ns.bitfields)

    def resolve_callback(self, name: str) -> Optional[NormalizedCallback]:
        return self._lookup("resolve_callback", name, lambda ns: ns.callbacks)

    def resolve_constant(self, name: str) -> Optional[NormalizedConstant]:
        return self._lookup("resolve_constant", name, lambda ns: ns.constants)

    def resolve_function(self, name: str) -> Optional[NormalizedFunction]:
        return self._lookup("resolve_function", name, lambda ns: ns.functions)

    def get_type_kind(self, name: str) -> Optional[TypeKind]:
        self._ensure_resolved("get_type_kind")
        if self.resolve_class(name) is not None:
            return "class"
        if self.resolve_interface(name) is not None:
            return "interface"
        if self.resolve_record(name) is not None:
            return "record"
        if self.resolve_enum(name) is not None:
            return "enum"
        if self.resolve_flags(name) is not None:
            return "flags"
        if self.resolve_callback(name) is not None:
            return "callback"
        return None

    def get_inheritance_chain(self, name: str) -> List[str]:
        cls = self.resolve_class(name)
        if cls is None:
            return []
        return cls.get_inheritance_chain()

    def get_implemented_interfaces(self, name: str) -> List[str]:
        cls = self.resolve_class(name)
        if cls is None:
            return []
        return cls.get_all_implemented_interfaces()

    def get_derived_classes(self, name: str) -> List[NormalizedClass]:
        return self.find_classes(lambda c: c.qualified_name != name and c.is_subclass_of(name))

    def get_implementors(self, name: str) -> List[NormalizedClass]:
        return self.find_classes(lambda c: name in c.implements)

    def is_gobject(self, name: str) -> bool:
        cls = self.resolve_class(name)
        return cls is not None and cls.glib_type_name is not None

    def is_boxed(self, name: str) -> bool:
        record = self.resolve_record(name)
        return record is not None and record.glib_type_name is not None

    def is_primitive(self, name: str) -> bool:
        return is_intrinsic_type(name)

    def find_classes(self, predicate: Callable[[NormalizedClass], bool]) -> List[NormalizedClass]:
        return self._find("find_classes", lambda ns: ns.classes, predicate)

    def find_interfaces(self, predicate: Callable[[NormalizedInterface], bool]) -> List[NormalizedInterface]:
        return self._find("find_interfaces", lambda ns: ns.interfaces, predicate)

    def find_records(self, predicate: Callable[[NormalizedRecord], bool]) -> List[NormalizedRecord]:
        return self._find("find_records", lambda ns: ns.records, predicate)

    def _lookup(self, operation, name, members):
        self._ensure_resolved(operation)
        namespace, simple_name = parse_qualified_name(name)
        ns = self._namespaces.get(namespace)
        if ns is None:
            return None
        return members(ns).get(simple_name)

    def _find(self, operation, members, predicate):
        self._ensure_resolved(operation)
        result = []
        for ns in self._namespaces.values():
            result.extend(e for e in members(ns).values() if predicate(e))
        return result

    def _ensure_resolved(self, operation: str) -> None:
        if not self._resolved:
            raise RepositoryNotResolvedError(operation)
