from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..context import GenerationContext
from ..ffi_types import FFI_VOID
from ..gir.model import NormalizedClass, NormalizedSignal
from ..gir.repository import Repository
from ..naming import normalize_class_name, to_camel_case, to_valid_identifier
from ..structures import (CodeWriter, MethodOverload, MethodStructure,
                          ParameterStructure)
from ..type_mapper import TypeMapper
from ..writers import Writers


@dataclass
class SignalMetaEntry:
    name: str
    params: List[str]
    return_type: str


class SignalBuilder:
    def __init__(
        self,
        cls: NormalizedClass,
        mapper: TypeMapper,
        ctx: GenerationContext,
        repository: Repository,
        writers: Writers,
        namespace: str,
        shared_library: str,
    ):
        self.cls = cls
        self.mapper = mapper
        self.ctx = ctx
        self.repository = repository
        self.writers = writers
        self.namespace = namespace
        self.shared_library = shared_library
        self.class_name = normalize_class_name(cls.name, namespace)

    def collect_own_signals(self) -> List[NormalizedSignal]:
        return list(self.cls.signals)

    def build_signal_meta_entries(self) -> List[SignalMetaEntry]:
        ffi_writer = self.writers.ffi_type_writer
        entries = []
        for signal in self.collect_own_signals():
            params = []
            for p in signal.parameters:
                if p.is_vararg():
                    continue
                mapped = self.mapper.map_parameter(p)
                self.ctx.add_type_imports(mapped.imports)
                if mapped.ffi.type == "ref":
                    self.ctx.uses_ref = True
                params.append(ffi_writer.to_literal(mapped.ffi))

            if signal.return_type is not None:
                return_type = ffi_writer.to_literal(self.mapper.map_type(signal.return_type, True).ffi)
            else:
                return_type = ffi_writer.to_literal(FFI_VOID)

            entries.append(SignalMetaEntry(signal.name, params, return_type))
        return entries

    def collect_all_signals(self) -> Tuple[List[NormalizedSignal], bool]:
        all_signals = []
        seen = set()

        def add(signals):
            for signal in signals:
                if signal.name not in seen:
                    seen.add(signal.name)
                    all_signals.append(signal)

        add(self.cls.signals)

        for iface_name in self.cls.implements:
            iface = self.repository.resolve_interface(iface_name)
            if iface is not None:
                add(iface.signals)

        has_cross_namespace_parent = False
        parent = self.cls.get_parent()
        while parent is not None:
            if parent.namespace != self.namespace:
                has_cross_namespace_parent = True
                break
            add(parent.signals)
            parent = parent.get_parent()

        if not has_cross_namespace_parent and self.cls.parent is not None and self.cls.get_parent() is None:
            has_cross_namespace_parent = not self.cls.parent.startswith(self.namespace + ".")

        return all_signals, has_cross_namespace_parent

    def build_connect_method_structures(self) -> List[MethodStructure]:
        all_signals, has_cross_namespace_parent = self.collect_all_signals()
        if not all_signals and not has_cross_namespace_parent:
            return []

        self.ctx.uses_call = True
        self.ctx.uses_resolve_signal_meta = True
        self.ctx.uses_type = True
        self.ctx.uses_get_native_object = True
        if self.namespace != "GObject":
            self.ctx.uses_gobject_namespace = True
        else:
            self.ctx.used_same_namespace_classes["ParamSpec"] = "ParamSpec"

        after = ParameterStructure("after", "boolean", has_question_token=True)
        overloads = []
        for signal in all_signals:
            return_type = "void"
            if signal.return_type is not None:
                mapped = self.mapper.map_type(signal.return_type, True)
                self.ctx.add_type_imports(mapped.imports)
                return_type = mapped.ts
            overloads.append(
                MethodOverload(
                    [
                        ParameterStructure("signal", f'"{signal.name}"'),
                        ParameterStructure("handler", f"({self._handler_params(signal)}) => {return_type}"),
                        after,
                    ],
                    "number",
                )
            )

        overloads.append(
            MethodOverload(
                [
                    ParameterStructure("signal", "string"),
                    ParameterStructure("handler", "(...args: any[]) => any"),
                    after,
                ],
                "number",
            )
        )

        return [
            MethodStructure(
                name="connect",
                overloads=overloads,
                parameters=[
                    ParameterStructure("signal", "string"),
                    ParameterStructure("handler", "(...args: any[]) => any"),
                    ParameterStructure("after", "", initializer="false"),
                ],
                return_type="number",
                statements=self._write_connect_body(),
            )
        ]

    def _write_connect_body(self) -> List[str]:
        param_spec = "ParamSpec" if self.namespace == "GObject" else "GObject.ParamSpec"

        w = CodeWriter()
        w.line("const meta = resolveSignalMeta(this.constructor, signal);")
        w.line('const selfType: Type = { type: "gobject", ownership: "none" };')
        w.line("const argTypes = meta ? [selfType, ...meta.params] : [selfType];")
        w.line("const returnType = meta?.returnType;")
        w.line("const wrappedHandler = (...args: unknown[]) => {")
        with w.indented():
            w.line("const self = getNativeObject(args[0]);")
            w.line("const callbackArgs = args.slice(1);")
            w.line("if (!meta) return handler(self, ...callbackArgs);")
            w.line("const wrapped = meta.params.map((t, i) => {")
            with w.indented():
                with w.block('if (t?.type === "gobject" && callbackArgs[i] != null)'):
                    w.line("return getNativeObject(callbackArgs[i]);")
                with w.block('if (t?.type === "gparam" && callbackArgs[i] != null)'):
                    w.line(f"return getNativeObject(callbackArgs[i], {param_spec});")
                w.line("return callbackArgs[i];")
            w.line("});")
            w.line("const result = handler(self, ...wrapped);")
            w.line("return result;")
        w.line("};")
        w.line("return call(")
        with w.indented():
            w.line(f'"{self.shared_library}",')
            w.line('"g_signal_connect_closure",')
            w.line("[")
            with w.indented():
                w.line('{ type: { type: "gobject", ownership: "none" }, value: this.id },')
                w.line('{ type: { type: "string", ownership: "none" }, value: signal },')
                w.line("{")
                with w.indented():
                    w.line('type: { type: "callback", argTypes, returnType, trampoline: "closure" },')
                    w.line("value: wrappedHandler,")
                w.line("},")
                w.line('{ type: { type: "boolean" }, value: after },')
            w.line("],")
            w.line('{ type: "int", size: 64, unsigned: true }')
        w.line(") as number;")
        return w.lines

    def _handler_params(self, signal: NormalizedSignal) -> str:
        params = [f"self: {self.class_name}"]
        for p in signal.parameters:
            if p.is_vararg():
                continue
            mapped = self.mapper.map_parameter(p)
            self.ctx.add_type_imports(mapped.imports)
            if mapped.ffi.type == "ref":
                self.ctx.uses_ref = True
            params.append(f"{to_valid_identifier(to_camel_case(p.name))}: {mapped.ts}")
        return ", ".join(params)
