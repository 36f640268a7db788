from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Set, Tuple

from .ffi_types import (FFI_INT32, FFI_POINTER, FFI_UINT32, FFI_VOID,
                        PRIMITIVE_TYPE_MAP, MappedType, Ownership, TypeImport,
                        array_type, async_callback_type, boxed_type,
                        callback_type, gobject_type, gparam_type,
                        gvariant_type, ref_type, string_type, struct_type)
from .gir.model import (NormalizedParameter, NormalizedType,
                        parse_qualified_name)
from .naming import to_pascal_case

if TYPE_CHECKING:
    from .gir.repository import Repository
    from .type_registry import RegisteredType

ASYNC_READY_CALLBACK = "Gio.AsyncReadyCallback"

CLOSURE_TYPES = {"GLib.Closure", "GObject.Closure"}

CALLBACK_TRAMPOLINES = {
    "Gio.AsyncReadyCallback": "asyncReady",
    "GLib.DestroyNotify": "destroy",
    "Gtk.DrawingAreaDrawFunc": "drawFunc",
    "Gtk.TickCallback": "tickCallback",
    "Gtk.ShortcutFunc": "shortcutFunc",
    "Gtk.ScaleFormatValueFunc": "scaleFormatValueFunc",
    "Gtk.TreeListModelCreateModelFunc": "treeListModelCreateFunc",
    "Gsk.PathIntersectionFunc": "pathIntersectionFunc",
    "Adw.AnimationTargetFunc": "animationTargetFunc",
}

CALLBACK_USER_DATA_NAMES = {"user_data", "data"}

UNSUPPORTED_CALLBACK_TS = "(...args: unknown[]) => unknown"

UNKNOWN_TYPE = MappedType("unknown", gobject_type("full"), kind="unknown")


def is_supported_callback(qualified_name: str) -> bool:
    return qualified_name in CALLBACK_TRAMPOLINES


def compute_transfer_full(is_return: bool, transfer_ownership: Optional[str]) -> bool:
    if transfer_ownership in ("full", "container"):
        return True
    if transfer_ownership == "none":
        return False
    return not is_return


def _ownership(transfer_full: bool) -> Ownership:
    return "full" if transfer_full else "none"


class TypeMapper:
    """
    Translates GIR type references into the TypeScript type and FFI
    descriptor pair used by every writer.

    One mapper serves one namespace: locally registered enums and records
    map to bare names, everything else is resolved through the repository's
    type registry and qualified with its namespace when foreign.
    """

    def __init__(self, repository: Repository, namespace: str, shared_library: str = ""):
        self.repository = repository
        self.namespace = namespace
        self.shared_library = shared_library
        self._enums: Dict[str, str] = {}
        self._flags: Set[str] = set()
        self._records: Dict[str, tuple] = {}
        self._skipped_classes: Set[str] = set()

    def register_enum(self, name: str, is_flags: bool = False) -> None:
        self._enums[name] = to_pascal_case(name)
        if is_flags:
            self._flags.add(name)

    def register_record(self, name: str, transformed_name: str, glib_type_name: Optional[str] = None) -> None:
        self._records[name] = (transformed_name, glib_type_name)

    def register_skipped_class(self, name: str) -> None:
        self._skipped_classes.add(name)

    def map_type(self, t: NormalizedType, is_return: bool = False, parent_transfer: Optional[str] = None) -> MappedType:
        transfer = t.transfer_ownership if t.transfer_ownership is not None else parent_transfer

        if t.is_void():
            return PRIMITIVE_TYPE_MAP["void"]

        if t.is_array and t.element_type is not None:
            element = self.map_type(t.element_type, is_return, transfer)
            list_type = t.container_type if t.is_list() else "array"
            return MappedType(
                f"{element.ts}[]",
                array_type(element.ffi, list_type, _ownership(compute_transfer_full(is_return, transfer))),
                external_type=element.external_type,
                kind=element.kind,
                inner_ts=element.ts,
            )

        if t.is_array:
            return MappedType(
                "unknown[]",
                array_type(FFI_VOID, "array", _ownership(compute_transfer_full(is_return, transfer))),
            )

        if t.is_string():
            return MappedType("string", string_type("none" if transfer == "none" else "full"))

        if t.is_variant():
            return self._map_special("GLib.Variant", gvariant_type(_ownership(compute_transfer_full(is_return, transfer))))

        if t.is_param_spec():
            return self._map_special(
                "GObject.ParamSpec", gparam_type(_ownership(compute_transfer_full(is_return, transfer)))
            )

        primitive = PRIMITIVE_TYPE_MAP.get(t.name)
        if primitive is not None:
            return primitive

        local = self._map_local(t.name, is_return, transfer)
        if local is not None:
            return local

        entry = self.repository.type_registry.resolve_in_namespace(t.name, self.namespace)
        if entry is None:
            return UNKNOWN_TYPE
        return self._map_registered(entry, is_return, transfer)

    def map_parameter(self, param: NormalizedParameter) -> MappedType:
        if param.is_out():
            inner = self.map_type(param.type, False, param.transfer_ownership)
            if param.caller_allocates and inner.ffi.type in ("boxed", "gobject", "struct"):
                return inner.with_ffi(inner.ffi.with_ownership("none"))
            return MappedType(
                f"Ref<{inner.ts}>",
                ref_type(inner.ffi),
                external_type=inner.external_type,
                kind=inner.kind,
                inner_ts=inner.ts,
            )

        qualified = self._qualify(param.type.name)
        if qualified == ASYNC_READY_CALLBACK:
            return MappedType(
                "(source: unknown, result: unknown) => void",
                async_callback_type(),
                kind="callback",
            )

        if is_supported_callback(qualified):
            mapped = self._map_supported_callback(qualified)
            if mapped is not None:
                return mapped

        if qualified in CLOSURE_TYPES or param.type.name in CLOSURE_TYPES or self.is_callback(param.type.name):
            return MappedType(UNSUPPORTED_CALLBACK_TS, callback_type(), kind="callback")

        mapped = self.map_type(param.type, False, param.transfer_ownership)
        if mapped.ffi.type in ("gobject", "boxed"):
            ownership = "full" if param.transfer_ownership == "full" else "none"
            return mapped.with_ffi(mapped.ffi.with_ownership(ownership))
        return mapped

    def is_nullable(self, param: NormalizedParameter) -> bool:
        return param.nullable or param.optional

    def is_closure_target(self, index: int, params: Sequence[NormalizedParameter]) -> bool:
        for p in params:
            if not is_supported_callback(self._qualify(p.type.name)):
                continue
            if p.closure == index or p.destroy == index:
                return True
        return False

    def has_unsupported_callback(self, param: NormalizedParameter) -> bool:
        qualified = self._qualify(param.type.name)
        if is_supported_callback(qualified):
            return False
        return qualified in CLOSURE_TYPES or param.type.name in CLOSURE_TYPES or self.is_callback(param.type.name)

    def is_callback(self, type_name: str) -> bool:
        namespace, name = parse_qualified_name(self._qualify(type_name))
        ns = self.repository.get_namespace(namespace)
        return ns is not None and name in ns.callbacks

    def is_supported_callback(self, type_name: str) -> bool:
        return is_supported_callback(self._qualify(type_name))

    def callback_parameter_mappings(self, type_name: str) -> Optional[List[Tuple[NormalizedParameter, MappedType]]]:
        qualified = self._qualify(type_name)
        if not is_supported_callback(qualified):
            return None
        callback = self.repository.resolve_callback(qualified)
        if callback is None:
            return None
        return [
            (p, self.map_type(p.type, False, p.transfer_ownership))
            for p in callback.parameters
            if p.name not in CALLBACK_USER_DATA_NAMES
        ]

    def _qualify(self, type_name: str) -> str:
        if "." in type_name:
            return type_name
        return f"{self.namespace}.{type_name}"

    def _map_local(self, name: str, is_return: bool, transfer: Optional[str]) -> Optional[MappedType]:
        namespace, simple_name = parse_qualified_name(name) if "." in name else (self.namespace, name)
        if namespace != self.namespace:
            return None

        transformed = self._enums.get(simple_name)
        if transformed is not None:
            kind = "flags" if simple_name in self._flags else "enum"
            return MappedType(
                transformed,
                FFI_UINT32 if kind == "flags" else FFI_INT32,
                TypeImport(kind, simple_name, self.namespace, transformed, False),
                kind,
            )

        record = self._records.get(simple_name)
        if record is not None:
            transformed, glib_type_name = record
            ownership = _ownership(compute_transfer_full(is_return, transfer))
            type_import = TypeImport("record", simple_name, self.namespace, transformed, False)
            if glib_type_name is None:
                return MappedType(transformed, struct_type(transformed, ownership), type_import, "record")
            return MappedType(
                transformed,
                boxed_type(glib_type_name, ownership, self.shared_library or None),
                type_import,
                "record",
            )

        return None

    def _map_special(self, qualified_name: str, ffi) -> MappedType:
        entry = self.repository.type_registry.resolve(qualified_name)
        if entry is None:
            return MappedType("unknown", ffi)
        is_external = entry.namespace != self.namespace
        ts = f"{entry.namespace}.{entry.transformed_name}" if is_external else entry.transformed_name
        type_import = TypeImport(entry.kind, entry.name, entry.namespace, entry.transformed_name, is_external)
        return MappedType(ts, ffi, type_import, entry.kind)

    def _map_registered(self, entry: RegisteredType, is_return: bool, transfer: Optional[str]) -> MappedType:
        is_external = entry.namespace != self.namespace
        ts = f"{entry.namespace}.{entry.transformed_name}" if is_external else entry.transformed_name
        ownership = _ownership(compute_transfer_full(is_return, transfer))

        if entry.kind in ("class", "interface") and entry.name in self._skipped_classes and not is_external:
            return MappedType("unknown", gobject_type(ownership), kind="unknown")

        type_import = TypeImport(entry.kind, entry.name, entry.namespace, entry.transformed_name, is_external)

        if entry.kind == "enum":
            return MappedType(ts, FFI_INT32, type_import, "enum")

        if entry.kind == "flags":
            return MappedType(ts, FFI_UINT32, type_import, "flags")

        if entry.kind == "record":
            record = self.repository.resolve_record(entry.qualified_name)
            if record is None or record.glib_type_name is None:
                return MappedType(ts, struct_type(entry.transformed_name, ownership), type_import, "record")
            if record.glib_type_name == "GVariant":
                return MappedType(ts, gvariant_type(ownership), type_import, "record")
            lib = self._library_of(entry.namespace) if is_external else None
            return MappedType(
                ts,
                boxed_type(record.glib_type_name, ownership, lib, record.glib_get_type),
                type_import,
                "record",
            )

        if entry.kind == "callback":
            return MappedType("number", FFI_POINTER, kind="callback")

        return MappedType(ts, gobject_type(ownership), type_import, entry.kind)

    def _map_supported_callback(self, qualified: str) -> Optional[MappedType]:
        callback = self.repository.resolve_callback(qualified)
        if callback is None:
            return None

        ts_params = []
        arg_types = []
        for p, mapped in self.callback_parameter_mappings(qualified):
            nullable = " | null" if p.nullable else ""
            ts_params.append(f"{p.name}: {mapped.ts}{nullable}")
            arg_types.append(mapped.ffi)

        return_type = None
        ts_return = "void"
        if not callback.return_type.is_void():
            mapped_return = self.map_type(callback.return_type, True, callback.return_type.transfer_ownership)
            return_type = mapped_return.ffi
            ts_return = mapped_return.ts + (" | null" if callback.return_type.nullable else "")

        return MappedType(
            f"({', '.join(ts_params)}) => {ts_return}",
            callback_type(CALLBACK_TRAMPOLINES[qualified], tuple(arg_types), return_type=return_type),
            kind="callback",
        )

    def _library_of(self, namespace: str) -> Optional[str]:
        ns = self.repository.get_namespace(namespace)
        if ns is None or not ns.shared_library:
            return None
        return ns.shared_library.split(",")[0]

