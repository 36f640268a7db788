from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from .ffi_types import TypeImport
from .naming import normalize_class_name


@dataclass
class GenerationContext:
    """
    Records everything one generated file refers to, so that imports can be
    synthesized once the file's structures are complete.

    Flags and collections only ever grow; a fresh instance is used for every
    generated file.
    """

    uses_ref: bool = False
    uses_call: bool = False
    uses_instantiating: bool = False
    add_gio_import: bool = False
    uses_type: bool = False
    uses_object_id: bool = False
    uses_read: bool = False
    uses_write: bool = False
    uses_alloc: bool = False
    uses_native_error: bool = False
    uses_native_object: bool = False
    uses_get_native_object: bool = False
    uses_register_native_class: bool = False
    uses_get_class_by_type_name: bool = False
    uses_resolve_signal_meta: bool = False
    uses_runtime_widget_meta: bool = False
    uses_gobject_namespace: bool = False

    used_enums: Set[str] = field(default_factory=set)
    used_records: Set[str] = field(default_factory=set)
    used_external_types: Dict[str, TypeImport] = field(default_factory=dict)
    used_same_namespace_classes: Dict[str, str] = field(default_factory=dict)
    used_interfaces: Dict[str, str] = field(default_factory=dict)
    signal_classes: Dict[str, str] = field(default_factory=dict)
    record_name_to_file: Dict[str, str] = field(default_factory=dict)
    interface_name_to_file: Dict[str, str] = field(default_factory=dict)
    method_renames: Dict[str, str] = field(default_factory=dict)

    def add_type_imports(self, imports: Iterable[TypeImport]) -> None:
        for imp in imports:
            if imp.is_external:
                self.used_external_types[f"{imp.namespace}.{imp.transformed_name}"] = imp
            elif imp.kind in ("enum", "flags"):
                self.used_enums.add(imp.transformed_name)
            elif imp.kind == "record":
                self.used_records.add(imp.transformed_name)
                self.record_name_to_file.setdefault(imp.transformed_name, imp.name)
            elif imp.kind == "interface":
                self.used_interfaces[imp.transformed_name] = imp.name
            elif imp.kind == "class":
                self.used_same_namespace_classes[imp.transformed_name] = imp.name

    def add_same_namespace_class(self, name: str, namespace: str) -> None:
        self.used_same_namespace_classes[normalize_class_name(name, namespace)] = name
