from __future__ import annotations

from collections import OrderedDict
from typing import Mapping, Optional, Set

from .intrinsics import is_intrinsic_type
from .model import (NormalizedCallback, NormalizedClass, NormalizedConstant,
                    NormalizedConstructor, NormalizedEnumeration,
                    NormalizedEnumerationMember, NormalizedField,
                    NormalizedFunction, NormalizedInterface, NormalizedMethod,
                    NormalizedNamespace, NormalizedParameter,
                    NormalizedProperty, NormalizedRecord, NormalizedSignal,
                    NormalizedType, qualified_name)
from .parser import (RawCallable, RawEnumeration, RawField, RawNamespace,
                     RawParameter, RawProperty, RawSignal, RawType)


class TypeNameIndex:
    """
    Knows every type name declared by each loaded namespace, so unqualified
    references can be qualified without caring about load order.
    """

    def __init__(self, namespaces: Mapping[str, RawNamespace]):
        self._names: OrderedDict[str, Set[str]] = OrderedDict()
        for ns_name, ns in namespaces.items():
            names = set()
            for group in (ns.classes, ns.interfaces, ns.records, ns.enumerations, ns.bitfields, ns.callbacks):
                names.update(entity.name for entity in group)
            self._names[ns_name] = names

    def qualify(self, name: str, current_namespace: str) -> str:
        if is_intrinsic_type(name) or "." in name or name == "array":
            return name
        if name in self._names.get(current_namespace, ()):
            return qualified_name(current_namespace, name)
        for ns_name, names in self._names.items():
            if ns_name != current_namespace and name in names:
                return qualified_name(ns_name, name)
        return qualified_name(current_namespace, name)


def normalize_type_name(name: str, current_namespace: str, index: TypeNameIndex) -> str:
    return index.qualify(name, current_namespace)


def normalize_namespace(raw: RawNamespace, index: TypeNameIndex) -> NormalizedNamespace:
    n = _Normalizer(raw.name, index)

    ns = NormalizedNamespace(
        name=raw.name,
        version=raw.version,
        shared_library=raw.shared_library,
        c_prefix=raw.c_prefix,
    )

    for c in raw.classes:
        ns.classes[c.name] = NormalizedClass(
            name=c.name,
            qualified_name=qualified_name(raw.name, c.name),
            c_type=c.c_type,
            parent=n.type_name(c.parent) if c.parent is not None else None,
            implements=[n.type_name(i) for i in c.implements],
            glib_type_name=c.glib_type_name,
            glib_get_type=c.glib_get_type,
            abstract=c.abstract,
            c_symbol_prefix=c.c_symbol_prefix,
            fundamental=c.fundamental,
            ref_func=c.ref_func,
            unref_func=c.unref_func,
            constructors=[n.callable(m, NormalizedConstructor) for m in c.constructors],
            methods=[n.callable(m, NormalizedMethod) for m in c.methods],
            static_functions=[n.callable(m, NormalizedFunction) for m in c.functions],
            properties=[n.property(p) for p in c.properties],
            signals=[n.signal(s) for s in c.signals],
            fields=[n.field(f) for f in c.fields],
        )

    for i in raw.interfaces:
        ns.interfaces[i.name] = NormalizedInterface(
            name=i.name,
            qualified_name=qualified_name(raw.name, i.name),
            c_type=i.c_type,
            glib_type_name=i.glib_type_name,
            glib_get_type=i.glib_get_type,
            prerequisites=[n.type_name(p) for p in i.prerequisites],
            methods=[n.callable(m, NormalizedMethod) for m in i.methods],
            static_functions=[n.callable(m, NormalizedFunction) for m in i.functions],
            properties=[n.property(p) for p in i.properties],
            signals=[n.signal(s) for s in i.signals],
        )

    for r in raw.records:
        ns.records[r.name] = NormalizedRecord(
            name=r.name,
            qualified_name=qualified_name(raw.name, r.name),
            c_type=r.c_type,
            opaque=r.opaque,
            disguised=r.disguised,
            glib_type_name=r.glib_type_name,
            glib_get_type=r.glib_get_type,
            is_gtype_struct_for=r.is_gtype_struct_for,
            copy_function=r.copy_function,
            free_function=r.free_function,
            fields=[n.field(f) for f in r.fields],
            methods=[n.callable(m, NormalizedMethod) for m in r.methods],
            constructors=[n.callable(m, NormalizedConstructor) for m in r.constructors],
            static_functions=[n.callable(m, NormalizedFunction) for m in r.functions],
        )

    for e in raw.enumerations:
        ns.enumerations[e.name] = n.enumeration(e, is_bitfield=False)
    for e in raw.bitfields:
        ns.bitfields[e.name] = n.enumeration(e, is_bitfield=True)

    for cb in raw.callbacks:
        ns.callbacks[cb.name] = NormalizedCallback(
            name=cb.name,
            qualified_name=qualified_name(raw.name, cb.name),
            c_type=cb.c_type,
            return_type=n.type(cb.return_type),
            parameters=[n.parameter(p) for p in cb.parameters],
            throws=cb.throws,
        )

    for const in raw.constants:
        ns.constants[const.name] = NormalizedConstant(
            name=const.name,
            qualified_name=qualified_name(raw.name, const.name),
            c_type=const.c_type,
            value=const.value,
            type=n.type(const.type),
        )

    for f in raw.functions:
        ns.functions[f.name] = n.callable(f, NormalizedFunction)

    return ns


class _Normalizer:
    def __init__(self, namespace: str, index: TypeNameIndex):
        self.namespace = namespace
        self.index = index

    def type_name(self, name: str) -> str:
        return normalize_type_name(name, self.namespace, self.index)

    def type(self, t: Optional[RawType]) -> Optional[NormalizedType]:
        if t is None:
            return None
        return NormalizedType(
            name=self.type_name(t.name),
            c_type=t.c_type,
            is_array=t.is_array,
            element_type=self.type(t.element_type),
            container_type=t.container_type,
            type_parameters=[self.type(p) for p in t.type_parameters],
            length=t.length,
            zero_terminated=t.zero_terminated,
            fixed_size=t.fixed_size,
            transfer_ownership=t.transfer_ownership,
            nullable=t.nullable,
        )

    def parameter(self, p: RawParameter) -> NormalizedParameter:
        return NormalizedParameter(
            name=p.name,
            type=self.type(p.type),
            direction=p.direction,
            caller_allocates=p.caller_allocates,
            nullable=p.nullable,
            optional=p.optional,
            scope=p.scope,
            closure=p.closure,
            destroy=p.destroy,
            transfer_ownership=p.transfer_ownership,
        )

    def callable(self, c: RawCallable, kind):
        return kind(
            name=c.name,
            c_identifier=c.c_identifier,
            return_type=self.type(c.return_type),
            parameters=[self.parameter(p) for p in c.parameters],
            throws=c.throws,
            finish_func=c.finish_func,
            shadows=c.shadows,
            shadowed_by=c.shadowed_by,
        )

    def property(self, p: RawProperty) -> NormalizedProperty:
        return NormalizedProperty(
            name=p.name,
            type=self.type(p.type),
            readable=p.readable,
            writable=p.writable,
            construct_only=p.construct_only,
            getter=p.getter,
            setter=p.setter,
        )

    def signal(self, s: RawSignal) -> NormalizedSignal:
        return NormalizedSignal(
            name=s.name,
            when=s.when,
            return_type=self.type(s.return_type),
            parameters=[self.parameter(p) for p in s.parameters],
        )

    def field(self, f: RawField) -> NormalizedField:
        return NormalizedField(
            name=f.name,
            type=self.type(f.type),
            writable=f.writable,
            readable=f.readable,
            private=f.private,
        )

    def enumeration(self, e: RawEnumeration, is_bitfield: bool) -> NormalizedEnumeration:
        return NormalizedEnumeration(
            name=e.name,
            qualified_name=qualified_name(self.namespace, e.name),
            c_type=e.c_type,
            is_bitfield=is_bitfield,
            glib_type_name=e.glib_type_name,
            glib_get_type=e.glib_get_type,
            members=[
                NormalizedEnumerationMember(m.name, int(m.value), m.c_identifier) for m in e.members
            ],
        )
