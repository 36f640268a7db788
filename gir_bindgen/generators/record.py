from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..context import GenerationContext
from ..ffi_types import PRIMITIVE_TYPE_MAP, boxed_type
from ..gir.model import (NormalizedField, NormalizedMethod, NormalizedRecord,
                         NormalizedType)
from ..naming import normalize_class_name, to_camel_case, to_valid_identifier
from ..structures import (ClassStructure, CodeWriter, ConstructorStructure,
                          MethodStructure, ParameterStructure,
                          PropertyStructure, SourceFile)
from ..type_mapper import TypeMapper
from ..type_registry import INTERNAL_RECORD_SUFFIXES
from ..writers import Writers
from ..writers.call_expression import assign
from ..writers.imports import ImportsBuilder, ImportsOptions

MEMORY_WRITABLE_TYPES = {
    "gboolean",
    "guint8",
    "gint8",
    "guchar",
    "gchar",
    "gint16",
    "guint16",
    "gshort",
    "gushort",
    "gint",
    "guint",
    "gint32",
    "guint32",
    "gfloat",
    "float",
    "gint64",
    "guint64",
    "glong",
    "gulong",
    "gsize",
    "gssize",
    "gdouble",
    "double",
}


def is_memory_writable_type(t: NormalizedType) -> bool:
    return not t.is_array and t.name in MEMORY_WRITABLE_TYPES


def primitive_type_size(t: NormalizedType) -> int:
    if t.is_array:
        return 8
    if t.name == "gboolean":
        return 4
    entry = PRIMITIVE_TYPE_MAP.get(t.name)
    if entry is not None and entry.ffi.size:
        return entry.ffi.size // 8
    return 8


def is_generated_record(record: NormalizedRecord) -> bool:
    if record.disguised or record.is_gtype_struct() or record.name.endswith(INTERNAL_RECORD_SUFFIXES):
        return False
    return record.is_boxed() or record.is_plain_struct()


@dataclass
class FieldLayout:
    field: NormalizedField
    offset: int
    size: int
    alignment: int


def calculate_layout(fields: Sequence[NormalizedField], include_private: bool = False) -> List[FieldLayout]:
    layout = []
    offset = 0
    for f in fields:
        size = primitive_type_size(f.type)
        alignment = size
        offset = -(-offset // alignment) * alignment
        layout.append(FieldLayout(f, offset, size, alignment))
        offset += size
    if include_private:
        return layout
    return [entry for entry in layout if not entry.field.private]


def calculate_struct_size(fields: Sequence[NormalizedField]) -> int:
    layout = calculate_layout(fields, include_private=True)
    if not layout:
        return 0
    last = layout[-1]
    raw_size = last.offset + last.size
    max_alignment = max([entry.alignment for entry in layout] + [1])
    return -(-raw_size // max_alignment) * max_alignment


def field_property_name(f: NormalizedField) -> str:
    name = to_valid_identifier(to_camel_case(f.name))
    if name == "id":
        return "id_"
    return name


class RecordGenerator:
    """
    Generates the module for a boxed type or plain C struct.

    Records get a native constructor when one is usable; otherwise the
    struct is allocated directly and its writable fields can be initialized
    through an `<Name>Init` object. Public fields become accessors reading
    and writing at their computed offsets.
    """

    def __init__(
        self,
        record: NormalizedRecord,
        mapper: TypeMapper,
        ctx: GenerationContext,
        writers: Writers,
        namespace: str,
        shared_library: str,
    ):
        self.record = record
        self.mapper = mapper
        self.ctx = ctx
        self.writers = writers
        self.method_body = writers.method_body
        self.namespace = namespace
        self.shared_library = shared_library
        self.record_name = normalize_class_name(record.name, namespace)

    def generate(self) -> SourceFile:
        record = self.record
        source_file = SourceFile()

        self.ctx.uses_native_object = True
        class_structure = ClassStructure(name=self.record_name, extends="NativeObject")
        class_structure.add_members(self._static_properties())

        selection = self.method_body.select_constructors(record.constructors)
        if selection.main is not None:
            class_structure.add_members([self._build_call_constructor(selection.main)])
            for ctor in selection.supported:
                if ctor is not selection.main:
                    class_structure.add_members([self._build_static_factory(ctor)])
        else:
            init_alias = self._build_init_alias()
            if init_alias is not None:
                source_file.add_statement(init_alias)
            class_structure.add_members([self._build_alloc_constructor(init_alias is not None)])

        for func in record.static_functions:
            if self.method_body.has_unsupported_callbacks(func.parameters):
                continue
            class_structure.add_members(
                [
                    self.method_body.build_static_function_structure(
                        func, self.record_name, record.name, self.shared_library
                    )
                ]
            )

        seen = set()
        for method in record.methods:
            if method.c_identifier in seen or self.method_body.has_unsupported_callbacks(method.parameters):
                continue
            seen.add(method.c_identifier)
            class_structure.add_members([self._build_method(method)])

        class_structure.add_members(self._build_field_accessors(record.methods))

        source_file.add_statement(class_structure)
        if record.glib_type_name:
            self.ctx.uses_register_native_class = True
            source_file.add_statement(f"registerNativeClass({self.record_name});")

        source_file.imports = ImportsBuilder(
            self.ctx, ImportsOptions(namespace=self.namespace, current_class_name=record.name)
        ).collect_imports()
        return source_file

    def writable_fields(self) -> List[NormalizedField]:
        return [f for f in self.record.fields if not f.private and f.writable and is_memory_writable_type(f.type)]

    def _static_properties(self) -> List[PropertyStructure]:
        if not self.record.glib_type_name:
            return [PropertyStructure(name="objectType", initializer='"struct" as const', is_static=True, is_readonly=True)]
        return [
            PropertyStructure(
                name="glibTypeName",
                type="string",
                initializer=f'"{self.record.glib_type_name}"',
                is_static=True,
                is_readonly=True,
            ),
            PropertyStructure(name="objectType", initializer='"boxed" as const', is_static=True, is_readonly=True),
        ]

    def _boxed_return(self):
        inner = self.record.glib_type_name or self.record.c_type or self.record_name
        return boxed_type(inner, "none", self.shared_library, self.record.glib_get_type)

    def _build_call_constructor(self, ctor) -> ConstructorStructure:
        self.ctx.uses_call = True
        self.ctx.uses_object_id = True
        call = self.writers.call_expression.build(
            self.shared_library,
            ctor.c_identifier,
            self.method_body.build_call_arguments(ctor.parameters),
            self._boxed_return(),
            always_emit_optional=True,
        )
        return ConstructorStructure(
            parameters=self.method_body.build_parameter_list(ctor.parameters),
            statements=["super();"] + assign(call, "this.id = ", " as ObjectId;"),
        )

    def _build_static_factory(self, ctor) -> MethodStructure:
        return MethodStructure(
            name=to_camel_case(ctor.name),
            parameters=self.method_body.build_parameter_list(ctor.parameters),
            return_type=self.record_name,
            statements=self.method_body.write_factory_method_body(
                self.shared_library,
                ctor.c_identifier,
                self.method_body.build_call_arguments(ctor.parameters),
                self._boxed_return(),
                self.record_name,
                ctor.throws,
                use_class_in_wrap=True,
            ),
            is_static=True,
        )

    def _build_init_alias(self) -> Optional[str]:
        fields = self.writable_fields()
        if not fields:
            return None
        props = []
        for f in fields:
            mapped = self.mapper.map_type(f.type, False, f.type.transfer_ownership)
            self.ctx.add_type_imports(mapped.imports)
            props.append(f"{field_property_name(f)}?: {mapped.ts}")
        return f"export type {self.record_name}Init = {{ {'; '.join(props)} }};"

    def _build_alloc_constructor(self, has_init: bool) -> ConstructorStructure:
        self.ctx.uses_object_id = True
        if not self.record.fields:
            return ConstructorStructure(statements=["super();", "this.id = null as unknown as ObjectId;"])

        self.ctx.uses_alloc = True
        size = calculate_struct_size(self.record.fields)
        if self.record.glib_type_name:
            alloc = f'alloc({size}, "{self.record.glib_type_name}", "{self.shared_library}")'
        else:
            alloc = f"alloc({size})"

        w = CodeWriter()
        w.line("super();")
        w.line(f"this.id = {alloc} as ObjectId;")
        if not has_init:
            return ConstructorStructure(statements=w.lines)

        self.ctx.uses_write = True
        writable = {id(f) for f in self.writable_fields()}
        for entry in calculate_layout(self.record.fields):
            if id(entry.field) not in writable:
                continue
            name = field_property_name(entry.field)
            ffi = self.writers.ffi_type_writer.to_literal(self.mapper.map_type(entry.field.type).ffi)
            w.line(f"if (init.{name} !== undefined) write(this.id, {ffi}, {entry.offset}, init.{name});")
        return ConstructorStructure(
            parameters=[ParameterStructure("init", f"{self.record_name}Init", initializer="{}")],
            statements=w.lines,
        )

    def _build_method(self, method: NormalizedMethod) -> MethodStructure:
        if self.record.glib_type_name:
            self_type = self.writers.ffi_type_writer.self_argument(
                is_record=True, record_name=self.record.glib_type_name, shared_library=self.shared_library
            )
        else:
            self_type = self.writers.ffi_type_writer.self_argument()
        return self.method_body.build_method_structure(
            method, to_camel_case(method.name), self_type, self.shared_library
        )

    def _build_field_accessors(self, methods: Sequence[NormalizedMethod]) -> List[MethodStructure]:
        method_names = {to_camel_case(m.name) for m in methods}
        ffi_writer = self.writers.ffi_type_writer
        accessors = []

        for entry in calculate_layout(self.record.fields):
            f = entry.field
            if f.type.is_array or not (f.readable or f.writable):
                continue
            name = to_valid_identifier(to_camel_case(f.name))
            if name in method_names:
                continue
            name = field_property_name(f)

            mapped = self.mapper.map_type(f.type, False, f.type.transfer_ownership)
            self.ctx.add_type_imports(mapped.imports)
            ffi = ffi_writer.to_literal(mapped.ffi)

            if f.readable:
                self.ctx.uses_read = True
                accessors.append(
                    MethodStructure(
                        name=name,
                        return_type=mapped.ts,
                        statements=[f"return read(this.id, {ffi}, {entry.offset}) as {mapped.ts};"],
                        accessor="get",
                    )
                )
            if f.writable and is_memory_writable_type(f.type):
                self.ctx.uses_write = True
                accessors.append(
                    MethodStructure(
                        name=name,
                        parameters=[ParameterStructure("value", mapped.ts)],
                        statements=[f"write(this.id, {ffi}, {entry.offset}, value);"],
                        accessor="set",
                    )
                )
        return accessors
