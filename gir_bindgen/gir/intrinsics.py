from __future__ import annotations

VOID_TYPES = {"void", "none"}

BOOLEAN_TYPES = {"gboolean"}

SIGNED_INTEGER_TYPES = {
    "gint",
    "gint8",
    "gint16",
    "gint32",
    "gint64",
    "gchar",
    "gshort",
    "glong",
    "gssize",
    "goffset",
    "gintptr",
}

UNSIGNED_INTEGER_TYPES = {
    "guint",
    "guint8",
    "guint16",
    "guint32",
    "guint64",
    "guchar",
    "gushort",
    "gulong",
    "gsize",
    "guintptr",
}

FLOAT_TYPES = {"gfloat", "gdouble"}

POINTER_TYPES = {"gpointer", "gconstpointer"}

STRING_TYPES = {"utf8", "filename"}

C_TYPES = {"int", "uint", "long", "ulong", "float", "double", "size_t", "ssize_t"}

NUMERIC_TYPES = SIGNED_INTEGER_TYPES | UNSIGNED_INTEGER_TYPES | FLOAT_TYPES | C_TYPES | {"GType"}

INTRINSIC_TYPES = (
    VOID_TYPES
    | BOOLEAN_TYPES
    | SIGNED_INTEGER_TYPES
    | UNSIGNED_INTEGER_TYPES
    | FLOAT_TYPES
    | POINTER_TYPES
    | STRING_TYPES
    | C_TYPES
    | {"GType", "GParamSpec", "GVariant"}
)

VARIANT_TYPES = {"GVariant", "GLib.Variant"}

PARAM_SPEC_TYPES = {"GParamSpec", "GObject.ParamSpec"}


def is_intrinsic_type(name: str) -> bool:
    return name in INTRINSIC_TYPES


def is_string_type(name: str) -> bool:
    return name in STRING_TYPES


def is_numeric_type(name: str) -> bool:
    return name in NUMERIC_TYPES


def is_boolean_type(name: str) -> bool:
    return name in BOOLEAN_TYPES


def is_void_type(name: str) -> bool:
    return name in VOID_TYPES
