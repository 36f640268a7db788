from __future__ import annotations

import dataclasses
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

if sys.version_info >= (3, 8):
    from typing import Literal
else:
    from typing_extensions import Literal

Ownership = Literal["full", "none", "container"]
TypeKind = Literal["class", "interface", "record", "enum", "flags", "callback", "unknown"]

OBJECT_FFI_TYPES = {"gobject", "boxed", "struct"}


@dataclass(frozen=True)
class FfiType:
    """
    One variant of the FFI descriptor union, tagged by `type`.

    Only the fields relevant to the variant are set; the rest stay None so
    that a writer can tell "absent" from "default".
    """

    type: str
    size: Optional[int] = None
    unsigned: Optional[bool] = None
    ownership: Optional[Ownership] = None
    inner_type: Union[str, FfiType, None] = None
    lib: Optional[str] = None
    get_type_fn: Optional[str] = None
    item_type: Optional[FfiType] = None
    list_type: Optional[str] = None
    trampoline: Optional[str] = None
    arg_types: Tuple[FfiType, ...] = ()
    source_type: Optional[FfiType] = None
    result_type: Optional[FfiType] = None
    return_type: Optional[FfiType] = None

    def with_ownership(self, ownership: Ownership) -> FfiType:
        return dataclasses.replace(self, ownership=ownership)


def int_type(size: int = 32, unsigned: bool = False) -> FfiType:
    return FfiType("int", size=size, unsigned=unsigned)


def float_type(size: int = 64) -> FfiType:
    return FfiType("float", size=size)


def string_type(ownership: Ownership = "full") -> FfiType:
    return FfiType("string", ownership=ownership)


def gobject_type(ownership: Ownership = "full") -> FfiType:
    return FfiType("gobject", ownership=ownership)


def gparam_type(ownership: Ownership = "full") -> FfiType:
    return FfiType("gparam", ownership=ownership)


def gvariant_type(ownership: Ownership = "full") -> FfiType:
    return FfiType("gvariant", ownership=ownership)


def boxed_type(
    inner_type: str,
    ownership: Ownership = "full",
    lib: Optional[str] = None,
    get_type_fn: Optional[str] = None,
) -> FfiType:
    return FfiType("boxed", ownership=ownership, inner_type=inner_type, lib=lib, get_type_fn=get_type_fn)


def struct_type(inner_type: str, ownership: Ownership = "full") -> FfiType:
    return FfiType("struct", ownership=ownership, inner_type=inner_type)


def ref_type(inner_type: FfiType) -> FfiType:
    return FfiType("ref", inner_type=inner_type)


def array_type(item_type: Optional[FfiType], list_type: str = "array", ownership: Ownership = "full") -> FfiType:
    return FfiType("array", item_type=item_type, list_type=list_type, ownership=ownership)


def callback_type(
    trampoline: str = "closure",
    arg_types: Tuple[FfiType, ...] = (),
    source_type: Optional[FfiType] = None,
    result_type: Optional[FfiType] = None,
    return_type: Optional[FfiType] = None,
) -> FfiType:
    return FfiType(
        "callback",
        trampoline=trampoline,
        arg_types=tuple(arg_types),
        source_type=source_type,
        result_type=result_type,
        return_type=return_type,
    )


def async_callback_type() -> FfiType:
    return FfiType(
        "asyncCallback",
        trampoline="asyncReady",
        source_type=SELF_TYPE_GOBJECT,
        result_type=SELF_TYPE_GOBJECT,
    )


FFI_VOID = FfiType("undefined")
FFI_NULL = FfiType("null")
FFI_BOOLEAN = FfiType("boolean")
FFI_INT32 = int_type(32, False)
FFI_UINT32 = int_type(32, True)
FFI_POINTER = int_type(64, True)
FFI_GTYPE = int_type(64, True)

SELF_TYPE_GOBJECT = gobject_type("none")
SELF_TYPE_GPARAM = gparam_type("none")


@dataclass(frozen=True)
class TypeImport:
    kind: TypeKind
    name: str
    namespace: str
    transformed_name: str
    is_external: bool


@dataclass(frozen=True)
class MappedType:
    ts: str
    ffi: FfiType
    external_type: Optional[TypeImport] = None
    kind: Optional[TypeKind] = None
    inner_ts: Optional[str] = None

    @property
    def is_unknown(self) -> bool:
        return self.kind == "unknown"

    @property
    def imports(self) -> Tuple[TypeImport, ...]:
        if self.external_type is None:
            return ()
        return (self.external_type,)

    def with_ffi(self, ffi: FfiType) -> MappedType:
        return dataclasses.replace(self, ffi=ffi)


def _primitive(ts: str, ffi: FfiType) -> MappedType:
    return MappedType(ts, ffi)


PRIMITIVE_TYPE_MAP: Dict[str, MappedType] = {}

for _names, _size, _unsigned in [
    (("gchar", "gint8"), 8, False),
    (("guchar", "guint8"), 8, True),
    (("gshort", "gint16"), 16, False),
    (("gushort", "guint16"), 16, True),
    (("gint", "gint32", "int"), 32, False),
    (("guint", "guint32", "uint", "GQuark", "GLib.Quark"), 32, True),
    (("glong", "gint64", "long", "gssize", "goffset", "ssize_t", "gintptr"), 64, False),
    (("gulong", "guint64", "ulong", "gsize", "size_t", "guintptr", "GType", "GObject.Type"), 64, True),
    (("gpointer", "gconstpointer"), 64, True),
]:
    for _name in _names:
        PRIMITIVE_TYPE_MAP[_name] = _primitive("number", int_type(_size, _unsigned))

for _name in ("gfloat", "float"):
    PRIMITIVE_TYPE_MAP[_name] = _primitive("number", float_type(32))
for _name in ("gdouble", "double"):
    PRIMITIVE_TYPE_MAP[_name] = _primitive("number", float_type(64))

PRIMITIVE_TYPE_MAP["gboolean"] = _primitive("boolean", FFI_BOOLEAN)
PRIMITIVE_TYPE_MAP["void"] = _primitive("void", FFI_VOID)
PRIMITIVE_TYPE_MAP["none"] = _primitive("void", FFI_VOID)
