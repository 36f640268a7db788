from __future__ import annotations

import sys
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple

if sys.version_info >= (3, 8):
    from typing import Literal
else:
    from typing_extensions import Literal

from .intrinsics import (PARAM_SPEC_TYPES, VARIANT_TYPES, is_boolean_type,
                         is_intrinsic_type, is_numeric_type, is_string_type,
                         is_void_type)

if TYPE_CHECKING:
    from .repository import Repository

Direction = Literal["in", "out", "inout"]
TransferOwnership = Literal["none", "full", "container"]


def qualified_name(namespace: str, name: str) -> str:
    return f"{namespace}.{name}"


def parse_qualified_name(name: str) -> Tuple[str, str]:
    namespace, _, simple_name = name.partition(".")
    return namespace, simple_name


@dataclass
class NormalizedType:
    name: str
    c_type: Optional[str] = None
    is_array: bool = False
    element_type: Optional[NormalizedType] = None
    container_type: Optional[str] = None
    type_parameters: List[NormalizedType] = field(default_factory=list)
    length: Optional[int] = None
    zero_terminated: Optional[bool] = None
    fixed_size: Optional[int] = None
    transfer_ownership: Optional[TransferOwnership] = None
    nullable: bool = False

    def is_intrinsic(self) -> bool:
        return is_intrinsic_type(self.name)

    def is_string(self) -> bool:
        return is_string_type(self.name)

    def is_numeric(self) -> bool:
        return is_numeric_type(self.name)

    def is_boolean(self) -> bool:
        return is_boolean_type(self.name)

    def is_void(self) -> bool:
        return is_void_type(self.name)

    def is_variant(self) -> bool:
        return self.name in VARIANT_TYPES

    def is_param_spec(self) -> bool:
        return self.name in PARAM_SPEC_TYPES

    def is_hash_table(self) -> bool:
        return self.container_type == "hashtable"

    def is_ptr_array(self) -> bool:
        return self.container_type == "ptrarray"

    def is_garray(self) -> bool:
        return self.container_type == "garray"

    def is_list(self) -> bool:
        return self.container_type in ("glist", "gslist")

    def get_namespace(self) -> Optional[str]:
        if self.is_intrinsic() or "." not in self.name:
            return None
        return parse_qualified_name(self.name)[0]

    def get_simple_name(self) -> str:
        if "." not in self.name:
            return self.name
        return parse_qualified_name(self.name)[1]


@dataclass
class NormalizedParameter:
    name: str
    type: NormalizedType
    direction: Direction = "in"
    caller_allocates: bool = False
    nullable: bool = False
    optional: bool = False
    scope: Optional[str] = None
    closure: Optional[int] = None
    destroy: Optional[int] = None
    transfer_ownership: Optional[TransferOwnership] = None

    def is_in(self) -> bool:
        return self.direction == "in"

    def is_out(self) -> bool:
        return self.direction in ("out", "inout")

    def is_callback(self) -> bool:
        return self.scope is not None

    def is_closure_data(self) -> bool:
        return self.closure is not None and not self.is_callback()

    def is_destroy_notify(self) -> bool:
        return self.name == "destroy" or self.type.name == "GLib.DestroyNotify"

    def requires_caller_allocation(self) -> bool:
        return self.is_out() and self.caller_allocates

    def is_vararg(self) -> bool:
        return self.name in ("...", "")


@dataclass
class NormalizedCallable:
    name: str
    c_identifier: str
    return_type: NormalizedType
    parameters: List[NormalizedParameter] = field(default_factory=list)
    throws: bool = False
    finish_func: Optional[str] = None
    shadows: Optional[str] = None
    shadowed_by: Optional[str] = None

    def get_required_parameters(self) -> List[NormalizedParameter]:
        return [p for p in self.parameters if not p.nullable and not p.optional and not p.is_vararg()]

    def get_optional_parameters(self) -> List[NormalizedParameter]:
        return [p for p in self.parameters if p.nullable or p.optional]

    def has_out_parameters(self) -> bool:
        return any(p.is_out() for p in self.parameters)

    def get_out_parameters(self) -> List[NormalizedParameter]:
        return [p for p in self.parameters if p.is_out()]


@dataclass
class NormalizedMethod(NormalizedCallable):
    def is_async(self) -> bool:
        return self.name.endswith("_async") or any(p.scope == "async" for p in self.parameters)

    def is_async_finish(self) -> bool:
        return self.name.endswith("_finish")

    def get_finish_method_name(self) -> Optional[str]:
        if self.finish_func is not None:
            return self.finish_func
        if self.name.endswith("_async"):
            return self.name[: -len("_async")] + "_finish"
        return None


@dataclass
class NormalizedConstructor(NormalizedCallable):
    pass


@dataclass
class NormalizedFunction(NormalizedCallable):
    pass


@dataclass
class NormalizedCallback:
    name: str
    qualified_name: str
    c_type: Optional[str]
    return_type: NormalizedType
    parameters: List[NormalizedParameter] = field(default_factory=list)
    throws: bool = False


@dataclass
class NormalizedProperty:
    name: str
    type: NormalizedType
    readable: bool = True
    writable: bool = False
    construct_only: bool = False
    getter: Optional[str] = None
    setter: Optional[str] = None

    def is_read_only(self) -> bool:
        return self.readable and not self.writable

    def is_write_only(self) -> bool:
        return self.writable and not self.readable

    def is_construct_only(self) -> bool:
        return self.construct_only

    def has_accessors(self) -> bool:
        return self.getter is not None or self.setter is not None


@dataclass
class NormalizedSignal:
    name: str
    when: str = "last"
    return_type: Optional[NormalizedType] = None
    parameters: List[NormalizedParameter] = field(default_factory=list)

    def has_return_value(self) -> bool:
        return self.return_type is not None and not self.return_type.is_void()


@dataclass
class NormalizedField:
    name: str
    type: NormalizedType
    writable: bool = False
    readable: bool = True
    private: bool = False


@dataclass
class NormalizedEnumerationMember:
    name: str
    value: int
    c_identifier: Optional[str] = None


@dataclass
class NormalizedEnumeration:
    name: str
    qualified_name: str
    c_type: Optional[str]
    is_bitfield: bool = False
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    members: List[NormalizedEnumerationMember] = field(default_factory=list)

    def get_member(self, name: str) -> Optional[NormalizedEnumerationMember]:
        return next((m for m in self.members if m.name == name), None)

    def get_member_by_value(self, value: int) -> Optional[NormalizedEnumerationMember]:
        return next((m for m in self.members if m.value == value), None)

    def get_member_names(self) -> List[str]:
        return [m.name for m in self.members]


@dataclass
class NormalizedConstant:
    name: str
    qualified_name: str
    c_type: Optional[str]
    value: str
    type: NormalizedType


@dataclass
class NormalizedRecord:
    name: str
    qualified_name: str
    c_type: Optional[str]
    opaque: bool = False
    disguised: bool = False
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    is_gtype_struct_for: Optional[str] = None
    copy_function: Optional[str] = None
    free_function: Optional[str] = None
    fields: List[NormalizedField] = field(default_factory=list)
    methods: List[NormalizedMethod] = field(default_factory=list)
    constructors: List[NormalizedConstructor] = field(default_factory=list)
    static_functions: List[NormalizedFunction] = field(default_factory=list)

    def is_boxed(self) -> bool:
        return self.glib_type_name is not None

    def is_gtype_struct(self) -> bool:
        return self.is_gtype_struct_for is not None

    def is_plain_struct(self) -> bool:
        return self.glib_type_name is None and not self.opaque and len(self.get_public_fields()) > 0

    def get_public_fields(self) -> List[NormalizedField]:
        return [f for f in self.fields if not f.private]


@dataclass
class NormalizedInterface:
    name: str
    qualified_name: str
    c_type: Optional[str]
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    prerequisites: List[str] = field(default_factory=list)
    methods: List[NormalizedMethod] = field(default_factory=list)
    static_functions: List[NormalizedFunction] = field(default_factory=list)
    properties: List[NormalizedProperty] = field(default_factory=list)
    signals: List[NormalizedSignal] = field(default_factory=list)

    repository: Optional[Repository] = field(default=None, repr=False, compare=False)

    def has_prerequisite(self, name: str) -> bool:
        return name in self.prerequisites

    def get_all_prerequisites(self) -> List[str]:
        result = []
        pending = list(self.prerequisites)
        while pending:
            name = pending.pop(0)
            if name in result:
                continue
            result.append(name)
            prereq = self.repository.resolve_interface(name) if self.repository is not None else None
            if prereq is not None:
                pending.extend(prereq.prerequisites)
        return result


@dataclass
class NormalizedClass:
    name: str
    qualified_name: str
    c_type: Optional[str]
    parent: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    abstract: bool = False
    c_symbol_prefix: Optional[str] = None
    fundamental: bool = False
    ref_func: Optional[str] = None
    unref_func: Optional[str] = None
    constructors: List[NormalizedConstructor] = field(default_factory=list)
    methods: List[NormalizedMethod] = field(default_factory=list)
    static_functions: List[NormalizedFunction] = field(default_factory=list)
    properties: List[NormalizedProperty] = field(default_factory=list)
    signals: List[NormalizedSignal] = field(default_factory=list)
    fields: List[NormalizedField] = field(default_factory=list)

    repository: Optional[Repository] = field(default=None, repr=False, compare=False)

    @property
    def namespace(self) -> str:
        return parse_qualified_name(self.qualified_name)[0]

    def get_parent(self) -> Optional[NormalizedClass]:
        if self.parent is None or self.repository is None:
            return None
        return self.repository.resolve_class(self.parent)

    def get_inheritance_chain(self) -> List[str]:
        chain = [self.qualified_name]
        current = self.get_parent()
        while current is not None:
            chain.append(current.qualified_name)
            current = current.get_parent()
        return chain

    def is_subclass_of(self, name: str) -> bool:
        if self.qualified_name == name:
            return True
        current = self.get_parent()
        while current is not None:
            if current.qualified_name == name:
                return True
            current = current.get_parent()
        if self.parent == name:
            return True
        return False

    def implements_interface(self, name: str) -> bool:
        return name in self.get_all_implemented_interfaces()

    def get_all_implemented_interfaces(self) -> List[str]:
        result = []
        current = self
        while current is not None:
            for iface in current.implements:
                if iface not in result:
                    result.append(iface)
            current = current.get_parent()
        return result

    def get_method(self, name: str) -> Optional[NormalizedMethod]:
        return next((m for m in self.methods if m.name == name), None)

    def get_property(self, name: str) -> Optional[NormalizedProperty]:
        return next((p for p in self.properties if p.name == name), None)

    def get_signal(self, name: str) -> Optional[NormalizedSignal]:
        return next((s for s in self.signals if s.name == name), None)

    def get_constructor(self, name: str) -> Optional[NormalizedConstructor]:
        return next((c for c in self.constructors if c.name == name), None)

    def get_all_methods(self) -> List[NormalizedMethod]:
        return self._collect(lambda c: c.methods)

    def get_all_properties(self) -> List[NormalizedProperty]:
        return self._collect(lambda c: c.properties)

    def get_all_signals(self) -> List[NormalizedSignal]:
        return self._collect(lambda c: c.signals)

    def find_method(self, name: str) -> Optional[NormalizedMethod]:
        return next((m for m in self.get_all_methods() if m.name == name), None)

    def find_property(self, name: str) -> Optional[NormalizedProperty]:
        return next((p for p in self.get_all_properties() if p.name == name), None)

    def find_signal(self, name: str) -> Optional[NormalizedSignal]:
        return next((s for s in self.get_all_signals() if s.name == name), None)

    def is_abstract(self) -> bool:
        return self.abstract

    def has_gtype(self) -> bool:
        return self.glib_type_name is not None

    def get_direct_subclasses(self) -> List[NormalizedClass]:
        if self.repository is None:
            return []
        return self.repository.find_classes(lambda c: c.parent == self.qualified_name)

    def _collect(self, members: Callable[[NormalizedClass], list]) -> list:
        result = []
        seen = set()
        current = self
        while current is not None:
            for member in members(current):
                if member.name not in seen:
                    seen.add(member.name)
                    result.append(member)
            current = current.get_parent()
        return result


@dataclass
class NormalizedNamespace:
    name: str
    version: str
    shared_library: str
    c_prefix: str
    classes: OrderedDict[str, NormalizedClass] = field(default_factory=OrderedDict)
    interfaces: OrderedDict[str, NormalizedInterface] = field(default_factory=OrderedDict)
    records: OrderedDict[str, NormalizedRecord] = field(default_factory=OrderedDict)
    enumerations: OrderedDict[str, NormalizedEnumeration] = field(default_factory=OrderedDict)
    bitfields: OrderedDict[str, NormalizedEnumeration] = field(default_factory=OrderedDict)
    callbacks: OrderedDict[str, NormalizedCallback] = field(default_factory=OrderedDict)
    constants: OrderedDict[str, NormalizedConstant] = field(default_factory=OrderedDict)
    functions: OrderedDict[str, NormalizedFunction] = field(default_factory=OrderedDict)
