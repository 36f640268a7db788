from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..context import GenerationContext
from ..ffi_types import FfiType, MappedType
from ..gir.model import (NormalizedCallable, NormalizedConstructor,
                         NormalizedFunction, NormalizedMethod,
                         NormalizedParameter)
from ..naming import to_camel_case, to_valid_identifier
from ..structures import MethodStructure, ParameterStructure
from ..type_mapper import TypeMapper
from .call_expression import CallArgument, CallExpressionBuilder, assign
from .ffi_type_writer import FfiTypeWriter


@dataclass
class ConstructorSelection:
    supported: List[NormalizedConstructor]
    main: Optional[NormalizedConstructor]


@dataclass
class AllocatedRef:
    param_name: str
    inner_type: str
    nullable: bool
    is_boxed: bool
    boxed_type_name: Optional[str]


@dataclass
class ObjectWrapInfo:
    needs_gobject_wrap: bool = False
    needs_boxed_wrap: bool = False
    needs_gvariant_wrap: bool = False
    needs_interface_wrap: bool = False
    needs_array_item_wrap: bool = False
    array_item_type: Optional[str] = None

    @property
    def needs_wrap(self) -> bool:
        return self.needs_gobject_wrap or self.needs_boxed_wrap or self.needs_gvariant_wrap or self.needs_interface_wrap


def format_nullable_return(ts: str, nullable: bool) -> str:
    if nullable and ts != "void":
        return f"{ts} | null"
    return ts


class MethodBodyWriter:
    def __init__(self, mapper: TypeMapper, ctx: GenerationContext, ffi_type_writer: FfiTypeWriter):
        self.mapper = mapper
        self.ctx = ctx
        self.ffi_type_writer = ffi_type_writer
        self.call_expression = CallExpressionBuilder(ffi_type_writer)

    def is_vararg(self, param: NormalizedParameter) -> bool:
        return param.is_vararg()

    def filter_parameters(self, parameters: Sequence[NormalizedParameter]) -> List[NormalizedParameter]:
        return [
            p
            for i, p in enumerate(parameters)
            if not self.is_vararg(p) and not self.mapper.is_closure_target(i, parameters)
        ]

    def has_unsupported_callbacks(self, parameters: Sequence[NormalizedParameter]) -> bool:
        return any(self.mapper.has_unsupported_callback(p) for p in parameters)

    def select_constructors(self, constructors: Sequence[NormalizedConstructor]) -> ConstructorSelection:
        supported = [c for c in constructors if not self.has_unsupported_callbacks(c.parameters)]
        main = next((c for c in supported if not any(self.is_vararg(p) for p in c.parameters)), None)
        return ConstructorSelection(supported, main)

    def to_js_param_name(self, param: NormalizedParameter) -> str:
        return to_valid_identifier(to_camel_case(param.name))

    def identify_allocated_refs(self, parameters: Sequence[NormalizedParameter]) -> List[AllocatedRef]:
        refs = []
        for param in self.filter_parameters(parameters):
            mapped = self.mapper.map_parameter(param)
            inner = mapped.ffi.inner_type
            if mapped.ffi.type != "ref" or not isinstance(inner, FfiType) or mapped.inner_ts is None:
                continue
            if inner.type not in ("boxed", "gobject"):
                continue
            is_boxed = inner.type == "boxed"
            refs.append(
                AllocatedRef(
                    param_name=self.to_js_param_name(param),
                    inner_type=mapped.inner_ts,
                    nullable=self.mapper.is_nullable(param),
                    is_boxed=is_boxed,
                    boxed_type_name=inner.inner_type if is_boxed else None,
                )
            )
        return refs

    def needs_object_wrap(self, mapped: MappedType) -> ObjectWrapInfo:
        ts = mapped.ts
        known = ts != "unknown" and not mapped.is_unknown
        ffi_type = mapped.ffi.type

        info = ObjectWrapInfo(
            needs_gobject_wrap=ffi_type in ("gobject", "gparam") and known and mapped.kind != "interface",
            needs_boxed_wrap=ffi_type == "boxed" and known and mapped.kind != "interface",
            needs_gvariant_wrap=ffi_type == "gvariant" and known,
            needs_interface_wrap=ffi_type == "gobject" and known and mapped.kind == "interface",
        )

        item_type = mapped.ffi.item_type
        if ffi_type == "array" and item_type is not None and item_type.type in ("gobject", "boxed", "gvariant"):
            info.needs_array_item_wrap = True
            info.array_item_type = ts[: -len("[]")] if ts.endswith("[]") else ts

        return info

    def get_result_var_name(self, parameters: Sequence[NormalizedParameter]) -> str:
        if any(self.to_js_param_name(p) == "result" for p in parameters):
            return "_result"
        return "result"

    def build_parameter_list(self, parameters: Sequence[NormalizedParameter]) -> List[ParameterStructure]:
        result = []
        saw_optional = False
        for param in self.filter_parameters(parameters):
            mapped = self.mapper.map_parameter(param)
            self.ctx.add_type_imports(mapped.imports)
            if mapped.ffi.type == "ref":
                self.ctx.uses_ref = True

            is_optional = self.mapper.is_nullable(param) or saw_optional
            if is_optional:
                saw_optional = True

            result.append(
                ParameterStructure(
                    name=self.to_js_param_name(param),
                    type=f"{mapped.ts} | null" if is_optional else mapped.ts,
                    has_question_token=is_optional,
                )
            )
        return result

    def build_call_arguments(self, parameters: Sequence[NormalizedParameter]) -> List[CallArgument]:
        args = []
        for param in self.filter_parameters(parameters):
            mapped = self.mapper.map_parameter(param)
            name = self.to_js_param_name(param)
            args.append(
                CallArgument(
                    type=mapped.ffi,
                    value=self.call_expression.build_value_expression(name, mapped),
                    optional=self.mapper.is_nullable(param),
                )
            )
        return args

    def build_method_structure(
        self,
        method: NormalizedMethod,
        method_name: str,
        self_type: str,
        shared_library: str,
    ) -> MethodStructure:
        params = self.build_parameter_list(method.parameters)
        return_mapping = self.mapper.map_type(method.return_type, True)
        self.ctx.add_type_imports(return_mapping.imports)

        ts_return = format_nullable_return(return_mapping.ts, method.return_type.nullable)

        return MethodStructure(
            name=method_name,
            parameters=params,
            return_type=None if ts_return == "void" else ts_return,
            statements=self.write_method_body(method, return_mapping, shared_library, self_type),
        )

    def build_static_function_structure(
        self,
        func: NormalizedFunction,
        class_name: str,
        original_class_name: str,
        shared_library: str,
    ) -> MethodStructure:
        params = self.build_parameter_list(func.parameters)
        return_mapping = self.mapper.map_type(func.return_type, True)
        self.ctx.add_type_imports(return_mapping.imports)

        return_name = func.return_type.name
        returns_own_class = return_name == original_class_name or return_name.endswith(f".{original_class_name}")
        base_return = class_name if returns_own_class else return_mapping.ts
        ts_return = format_nullable_return(base_return, func.return_type.nullable)

        return MethodStructure(
            name=to_valid_identifier(to_camel_case(func.name)),
            parameters=params,
            return_type=None if ts_return == "void" else ts_return,
            statements=self.write_function_body(
                func, return_mapping, shared_library, class_name if returns_own_class else None
            ),
            is_static=True,
        )

    def write_method_body(
        self,
        method: NormalizedCallable,
        return_mapping: MappedType,
        shared_library: str,
        self_type: str,
    ) -> List[str]:
        return self.write_callable_body(
            shared_library,
            method,
            return_mapping,
            self_arg=CallArgument(self_type, "this.id"),
        )

    def write_function_body(
        self,
        func: NormalizedCallable,
        return_mapping: MappedType,
        shared_library: str,
        own_class_name: Optional[str] = None,
    ) -> List[str]:
        return self.write_callable_body(shared_library, func, return_mapping, own_class_name=own_class_name)

    def write_callable_body(
        self,
        shared_library: str,
        callable_: NormalizedCallable,
        return_mapping: MappedType,
        self_arg: Optional[CallArgument] = None,
        own_class_name: Optional[str] = None,
    ) -> List[str]:
        parameters = callable_.parameters
        is_nullable = callable_.return_type.nullable
        raw_return = return_mapping.ts
        base_return = own_class_name if own_class_name is not None else raw_return
        ts_return = format_nullable_return(base_return, is_nullable)

        wrap = self.needs_object_wrap(return_mapping)
        has_return_value = base_return != "void"
        allocated_refs = self.identify_allocated_refs(parameters)
        result_var = self.get_result_var_name(parameters)

        lines = []
        if callable_.throws:
            lines.append("const error = { value: null as unknown };")

        args = self.build_call_arguments(parameters)
        if callable_.throws:
            args.append(self.call_expression.error_argument())

        self.ctx.uses_call = True
        call = self.call_expression.build(
            shared_library, callable_.c_identifier, args, return_mapping.ffi, self_arg=self_arg
        )

        if own_class_name is not None or (wrap.needs_wrap and has_return_value):
            self.ctx.uses_get_native_object = True
            lines += assign(call, "const ptr = ")
            lines += self._error_check(callable_.throws)
            lines += self._ref_rewrap(allocated_refs)
            if own_class_name is not None:
                lines.append(f"return getNativeObject(ptr, {own_class_name})!;")
            else:
                if is_nullable:
                    lines.append("if (ptr === null) return null;")
                if wrap.needs_boxed_wrap or wrap.needs_gvariant_wrap or wrap.needs_interface_wrap:
                    lines.append(f"return getNativeObject(ptr, {base_return})!;")
                else:
                    lines.append(f"return getNativeObject(ptr) as {base_return};")
        elif wrap.needs_array_item_wrap and wrap.array_item_type:
            self.ctx.uses_get_native_object = True
            lines += assign(call, "const arr = ", " as unknown[];")
            lines += self._error_check(callable_.throws)
            lines += self._ref_rewrap(allocated_refs)
            lines.append(f"return arr.map((item) => getNativeObject(item) as {wrap.array_item_type});")
        else:
            needs_result_var = callable_.throws or len(allocated_refs) > 0
            needs_cast = raw_return not in ("void", "unknown")

            if needs_result_var and has_return_value:
                prefix = f"const {result_var} = "
            elif has_return_value:
                prefix = "return "
            else:
                prefix = ""
            suffix = f" as {ts_return};" if needs_cast else ";"
            lines += assign(call, prefix, suffix)
            lines += self._error_check(callable_.throws)
            lines += self._ref_rewrap(allocated_refs)
            if needs_result_var and has_return_value:
                lines.append(f"return {result_var};")

        return lines

    def write_factory_method_body(
        self,
        shared_library: str,
        c_identifier: str,
        args: List[CallArgument],
        return_type: FfiType,
        wrap_class_name: str,
        throws: bool,
        use_class_in_wrap: bool,
    ) -> List[str]:
        lines = []
        if throws:
            lines.append("const error = { value: null as unknown };")
            args = args + [self.call_expression.error_argument()]

        self.ctx.uses_call = True
        call = self.call_expression.build(shared_library, c_identifier, args, return_type, always_emit_optional=True)
        lines += assign(call, "const ptr = ")
        lines += self._error_check(throws)

        self.ctx.uses_get_native_object = True
        if use_class_in_wrap:
            lines.append(f"return getNativeObject(ptr, {wrap_class_name})!;")
        else:
            lines.append(f"return getNativeObject(ptr) as {wrap_class_name};")
        return lines

    def _error_check(self, throws: bool) -> List[str]:
        if not throws:
            return []
        self.ctx.uses_native_error = True
        return self.call_expression.error_check_lines()

    def _ref_rewrap(self, refs: Sequence[AllocatedRef]) -> List[str]:
        lines = []
        for ref in refs:
            self.ctx.uses_get_native_object = True
            name = ref.param_name
            if ref.is_boxed:
                lines.append(f"if ({name}) {name}.value = getNativeObject({name}.value, {ref.inner_type})!;")
            else:
                lines.append(f"if ({name}) {name}.value = getNativeObject({name}.value)! as {ref.inner_type};")
        return lines
