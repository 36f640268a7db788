from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Set

from ..context import GenerationContext
from ..ffi_types import FFI_NULL, FFI_VOID, MappedType, async_callback_type
from ..gir.model import NormalizedConstructor, NormalizedMethod, NormalizedParameter
from ..naming import to_camel_case
from ..structures import CodeWriter, MethodStructure
from ..type_mapper import TypeMapper
from ..writers import Writers
from ..writers.method_body import ConstructorSelection, format_nullable_return


@dataclass
class AsyncMethodAnalysis:
    async_methods: Set[str] = field(default_factory=set)
    finish_methods: Set[str] = field(default_factory=set)
    async_pairs: Dict[str, str] = field(default_factory=dict)


def analyze_async_methods(methods: Sequence[NormalizedMethod]) -> AsyncMethodAnalysis:
    """
    Pairs `x_async` methods with their `x_finish` counterpart.

    An async method is only paired when its finish method is present in the
    same list; otherwise it stays a plain method.
    """
    names = {m.name for m in methods}
    analysis = AsyncMethodAnalysis()
    for method in methods:
        if not (method.name.endswith("_async") or method.finish_func is not None):
            continue
        finish_name = method.get_finish_method_name()
        if finish_name is None or finish_name not in names or finish_name == method.name:
            continue
        analysis.async_methods.add(method.name)
        analysis.finish_methods.add(finish_name)
        analysis.async_pairs[method.name] = finish_name
    return analysis


class MethodBuilder:
    def __init__(
        self,
        mapper: TypeMapper,
        ctx: GenerationContext,
        writers: Writers,
        shared_library: str,
    ):
        self.mapper = mapper
        self.ctx = ctx
        self.writers = writers
        self.method_body = writers.method_body
        self.shared_library = shared_library

    def build_structures(
        self,
        methods: Sequence[NormalizedMethod],
        is_param_spec: bool = False,
    ) -> List[MethodStructure]:
        analysis = analyze_async_methods(methods)
        seen = set()
        structures = []

        for method in methods:
            if method.c_identifier in seen:
                continue
            seen.add(method.c_identifier)
            if self.method_body.has_unsupported_callbacks(method.parameters):
                continue
            if method.name in analysis.async_methods or method.name in analysis.finish_methods:
                continue
            structures.append(self._build_method_structure(method, is_param_spec))

        for async_name, finish_name in analysis.async_pairs.items():
            async_method = next((m for m in methods if m.name == async_name), None)
            finish_method = next((m for m in methods if m.name == finish_name), None)
            if async_method is not None and finish_method is not None:
                structures.append(self._build_async_wrapper(async_method, finish_method, is_param_spec))

        return structures

    def has_unsupported_callbacks(self, parameters: Sequence[NormalizedParameter]) -> bool:
        return self.method_body.has_unsupported_callbacks(parameters)

    def select_constructors(self, constructors: Sequence[NormalizedConstructor]) -> ConstructorSelection:
        return self.method_body.select_constructors(constructors)

    def _self_type(self, is_param_spec: bool) -> str:
        return self.writers.ffi_type_writer.self_argument(is_param_spec=is_param_spec)

    def _build_method_structure(self, method: NormalizedMethod, is_param_spec: bool) -> MethodStructure:
        name = self.ctx.method_renames.get(method.c_identifier, to_camel_case(method.name))
        return self.method_body.build_method_structure(
            method, name, self._self_type(is_param_spec), self.shared_library
        )

    def _build_async_wrapper(
        self,
        async_method: NormalizedMethod,
        finish_method: NormalizedMethod,
        is_param_spec: bool,
    ) -> MethodStructure:
        base_name = async_method.name[: -len("_async")] if async_method.name.endswith("_async") else async_method.name
        params = self.filter_async_parameters(async_method.parameters)

        return_mapping = self.mapper.map_type(finish_method.return_type, True)
        self.ctx.add_type_imports(return_mapping.imports)
        inner_return = format_nullable_return(return_mapping.ts, finish_method.return_type.nullable)

        return MethodStructure(
            name=f"{to_camel_case(base_name)}Async",
            parameters=self.method_body.build_parameter_list(params),
            return_type=f"Promise<{inner_return}>",
            statements=self._write_async_wrapper_body(
                async_method, finish_method, params, return_mapping, self._self_type(is_param_spec)
            ),
        )

    def filter_async_parameters(self, parameters: Sequence[NormalizedParameter]) -> List[NormalizedParameter]:
        result = []
        for index, p in enumerate(parameters):
            if p.is_vararg():
                continue
            if self.mapper.is_callback(p.type.name):
                continue
            if any(
                self.mapper.is_callback(other.type.name) and (other.closure == index or other.destroy == index)
                for other in parameters
            ):
                continue
            if p.name == "user_data":
                continue
            result.append(p)
        return result

    def _write_async_wrapper_body(
        self,
        async_method: NormalizedMethod,
        finish_method: NormalizedMethod,
        params: Sequence[NormalizedParameter],
        return_mapping: MappedType,
        self_type: str,
    ) -> List[str]:
        self.ctx.uses_call = True
        ffi_writer = self.writers.ffi_type_writer
        has_return_value = return_mapping.ts != "void"
        wrap = self.method_body.needs_object_wrap(return_mapping)
        is_nullable = finish_method.return_type.nullable
        base_return = return_mapping.ts
        reject = "reject" if finish_method.throws else "_reject"

        w = CodeWriter()
        w.line(f"return new Promise((resolve, {reject}) => {{")
        with w.indented():
            w.line("call(")
            with w.indented():
                w.line(f'"{self.shared_library}",')
                w.line(f'"{async_method.c_identifier}",')
                w.line("[")
                with w.indented():
                    w.line(f"{{ type: {self_type}, value: this.id }},")
                    for param in params:
                        mapped = self.mapper.map_parameter(param)
                        value = self.method_body.call_expression.build_value_expression(
                            self.method_body.to_js_param_name(param), mapped
                        )
                        optional = "true" if self.mapper.is_nullable(param) else "false"
                        w.line(f"{{ type: {ffi_writer.to_literal(mapped.ffi)}, value: {value}, optional: {optional} }},")
                    w.line("{")
                    with w.indented():
                        w.line(f"type: {ffi_writer.to_literal(async_callback_type())},")
                        w.line("value: (_source: unknown, result: unknown) => {")
                        with w.indented():
                            self._write_finish_call(w, finish_method, return_mapping, self_type, has_return_value, wrap)
                            if finish_method.throws:
                                self.ctx.uses_native_error = True
                                with w.block("if (error.value !== null)"):
                                    w.line("reject(new NativeError(error.value));")
                                    w.line("return;")
                            if not has_return_value:
                                w.line("resolve();")
                            elif wrap.needs_wrap:
                                if is_nullable:
                                    with w.block("if (ptr === null)"):
                                        w.line("resolve(null);")
                                        w.line("return;")
                                self.ctx.uses_get_native_object = True
                                if wrap.needs_boxed_wrap or wrap.needs_gvariant_wrap or wrap.needs_interface_wrap:
                                    w.line(f"resolve(getNativeObject(ptr, {base_return})!);")
                                else:
                                    w.line(f"resolve(getNativeObject(ptr) as {base_return});")
                            else:
                                w.line("resolve(value);")
                        w.line("},")
                    w.line("},")
                    w.line(f"{{ type: {ffi_writer.to_literal(FFI_NULL)}, value: null }},")
                w.line("],")
                w.line(ffi_writer.to_literal(FFI_VOID))
            w.line(");")
        w.line("});")
        return w.lines

    def _write_finish_call(self, w, finish_method, return_mapping, self_type, has_return_value, wrap) -> None:
        ffi_writer = self.writers.ffi_type_writer
        if finish_method.throws:
            w.line("const error = { value: null as unknown };")

        if not has_return_value:
            w.line("call(")
        elif wrap.needs_wrap:
            w.line("const ptr = call(")
        else:
            w.line("const value = call(")

        with w.indented():
            w.line(f'"{self.shared_library}",')
            w.line(f'"{finish_method.c_identifier}",')
            w.line("[")
            with w.indented():
                w.line(f"{{ type: {self_type}, value: this.id }},")
                w.line('{ type: { type: "gobject", ownership: "none" }, value: result },')
                if finish_method.throws:
                    w.line(f"{{ type: {ffi_writer.error_argument_literal()}, value: error }},")
            w.line("],")
            w.line(ffi_writer.to_literal(return_mapping.ffi))

        if has_return_value and not wrap.needs_wrap:
            w.line(f") as {return_mapping.ts};")
        else:
            w.line(");")
