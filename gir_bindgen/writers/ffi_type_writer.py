from __future__ import annotations

from typing import List, Optional, Tuple, Union

from ..errors import ConfigurationError
from ..ffi_types import FfiType, boxed_type, ref_type

Property = Tuple[str, Union[str, int, bool, "FfiType", List["FfiType"]]]

OWNERSHIP_TYPES = {"string", "gobject", "gparam", "gvariant"}


class FfiTypeWriter:
    """
    Renders FFI descriptors as TypeScript object literals.

    The shared library a descriptor falls back to is fixed at construction;
    create one writer per generated namespace.
    """

    def __init__(self, shared_library: Optional[str] = None, glib_library: Optional[str] = None):
        self.shared_library = shared_library
        self.glib_library = glib_library

    def describe(self, t: FfiType) -> List[Property]:
        kind = t.type

        if kind == "int":
            return [
                ("type", "int"),
                ("size", t.size if t.size is not None else 32),
                ("unsigned", t.unsigned if t.unsigned is not None else False),
            ]

        if kind == "float":
            return [("type", "float"), ("size", t.size if t.size is not None else 64)]

        if kind in OWNERSHIP_TYPES:
            return [("type", kind), ("ownership", t.ownership or "full")]

        if kind == "boxed":
            inner_type = t.inner_type if isinstance(t.inner_type, str) else ""
            if inner_type == "GVariant":
                return [("type", "gvariant"), ("ownership", t.ownership or "full")]
            lib = t.lib if t.lib is not None else (self.shared_library or "")
            props = [
                ("type", "boxed"),
                ("ownership", t.ownership or "full"),
                ("innerType", inner_type),
                ("lib", lib),
            ]
            if t.get_type_fn:
                props.append(("getTypeFn", t.get_type_fn))
            return props

        if kind == "struct":
            inner_type = t.inner_type if isinstance(t.inner_type, str) else ""
            return [("type", "struct"), ("ownership", t.ownership or "full"), ("innerType", inner_type)]

        if kind == "ref":
            props = [("type", "ref")]
            if isinstance(t.inner_type, FfiType):
                props.append(("innerType", t.inner_type))
            return props

        if kind == "array":
            props = [("type", "array")]
            if t.item_type is not None:
                props.append(("itemType", t.item_type))
            props.append(("listType", t.list_type or "array"))
            props.append(("ownership", t.ownership or "full"))
            return props

        if kind in ("callback", "asyncCallback"):
            props = [("type", "callback"), ("trampoline", t.trampoline or "closure")]
            if t.arg_types:
                props.append(("argTypes", list(t.arg_types)))
            if t.source_type is not None:
                props.append(("sourceType", t.source_type))
            if t.result_type is not None:
                props.append(("resultType", t.result_type))
            if t.return_type is not None:
                props.append(("returnType", t.return_type))
            return props

        return [("type", kind)]

    def to_literal(self, t: FfiType) -> str:
        return "{ " + ", ".join(f"{name}: {self._format_value(value)}" for name, value in self.describe(t)) + " }"

    def create_gerror_ref_type_descriptor(self) -> FfiType:
        return ref_type(boxed_type("GError", "full", self._require_glib_library()))

    def error_argument_literal(self) -> str:
        return self.to_literal(self.create_gerror_ref_type_descriptor())

    def self_argument(
        self,
        is_record: bool = False,
        record_name: Optional[str] = None,
        shared_library: Optional[str] = None,
        is_param_spec: bool = False,
    ) -> str:
        if is_record and record_name:
            lib = shared_library if shared_library is not None else (self.shared_library or "")
            return f'{{ type: "boxed", ownership: "none", innerType: "{record_name}", lib: "{lib}" }}'
        if is_param_spec:
            return '{ type: "gparam", ownership: "none" }'
        return '{ type: "gobject", ownership: "none" }'

    def _require_glib_library(self) -> str:
        if not self.glib_library:
            raise ConfigurationError("glibLibrary must be set in the FFI type writer for GError types")
        return self.glib_library

    def _format_value(self, value) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            return str(value)
        if isinstance(value, FfiType):
            return self.to_literal(value)
        if isinstance(value, list):
            return "[" + ", ".join(self.to_literal(item) for item in value) + "]"
        return f'"{value}"'
