from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ..context import GenerationContext
from ..ffi_types import FFI_GTYPE, FFI_NULL, gobject_type
from ..gir.model import NormalizedClass, NormalizedConstructor
from ..naming import normalize_class_name, to_camel_case
from ..structures import CodeWriter, ConstructorStructure, MethodStructure
from ..writers import Writers
from ..writers.call_expression import CallArgument, assign


class ConstructorBuilder:
    """
    Decides how a class is instantiated from TypeScript.

    With a usable native constructor and a parent class, `new Cls(...)`
    calls it directly; every other supported constructor becomes a static
    factory. Concrete GObject classes without one fall back to g_object_new.
    """

    def __init__(
        self,
        cls: NormalizedClass,
        ctx: GenerationContext,
        writers: Writers,
        namespace: str,
        shared_library: str,
        gobject_library: Optional[str] = None,
    ):
        self.cls = cls
        self.ctx = ctx
        self.writers = writers
        self.method_body = writers.method_body
        self.namespace = namespace
        self.shared_library = shared_library
        self.gobject_library = gobject_library
        self.class_name = normalize_class_name(cls.name, namespace)
        self.parent_factory_method_names: Set[str] = set()

    def build(self, has_parent: bool) -> Tuple[List[ConstructorStructure], List[MethodStructure]]:
        selection = self.method_body.select_constructors(self.cls.constructors)
        main = selection.main
        constructors = []
        methods = []

        if main is not None and has_parent:
            constructors.append(self._build_main_constructor(main))
            for ctor in selection.supported:
                if ctor is not main and not self._conflicts_with_parent_factory(ctor):
                    methods.append(self._build_static_factory(ctor))
            return constructors, methods

        for ctor in selection.supported:
            if not self._conflicts_with_parent_factory(ctor):
                methods.append(self._build_static_factory(ctor))

        if has_parent and self.cls.glib_get_type and not self.cls.abstract:
            constructors.append(self._build_gobject_new_constructor(self.cls.glib_get_type))
        elif has_parent:
            constructors.append(ConstructorStructure(statements=["super();"]))
        else:
            constructors.append(ConstructorStructure(statements=["super();", "this.create();"]))
            methods.append(MethodStructure(name="create", scope="protected"))

        return constructors, methods

    def _build_main_constructor(self, ctor: NormalizedConstructor) -> ConstructorStructure:
        self.ctx.uses_instantiating = True
        self.ctx.uses_call = True
        params = self.method_body.build_parameter_list(ctor.parameters)
        args = self.method_body.build_call_arguments(ctor.parameters)
        call = self.writers.call_expression.build(
            self.shared_library,
            ctor.c_identifier,
            args,
            gobject_type(_ownership(ctor)),
            always_emit_optional=True,
        )
        return ConstructorStructure(parameters=params, statements=self._instantiating_guard(assign(call, "this.id = ")))

    def _build_gobject_new_constructor(self, get_type_func: str) -> ConstructorStructure:
        self.ctx.uses_instantiating = True
        self.ctx.uses_call = True
        call_builder = self.writers.call_expression
        lines = assign(call_builder.build(self.shared_library, get_type_func, [], FFI_GTYPE), "const gtype = ")
        lines += assign(
            call_builder.build(
                self.gobject_library or "",
                "g_object_new",
                [CallArgument(FFI_GTYPE, "gtype", False), CallArgument(FFI_NULL, "null", False)],
                gobject_type("full"),
                always_emit_optional=True,
            ),
            "this.id = ",
        )
        return ConstructorStructure(statements=self._instantiating_guard(lines))

    def _instantiating_guard(self, body: List[str]) -> List[str]:
        w = CodeWriter()
        w.line("if (!isInstantiating) {")
        with w.indented():
            w.line("setInstantiating(true);")
            w.line("// @ts-ignore")
            w.line("super();")
            w.line("setInstantiating(false);")
            w.extend(body)
        w.line("} else {")
        with w.indented():
            w.line("// @ts-ignore")
            w.line("super();")
        w.line("}")
        return w.lines

    def _conflicts_with_parent_factory(self, ctor: NormalizedConstructor) -> bool:
        return to_camel_case(ctor.name) in self.parent_factory_method_names

    def _build_static_factory(self, ctor: NormalizedConstructor) -> MethodStructure:
        params = self.method_body.build_parameter_list(ctor.parameters)
        self.ctx.uses_get_native_object = True
        statements = self.method_body.write_factory_method_body(
            self.shared_library,
            ctor.c_identifier,
            self.method_body.build_call_arguments(ctor.parameters),
            gobject_type(_ownership(ctor)),
            self.class_name,
            ctor.throws,
            use_class_in_wrap=False,
        )
        return MethodStructure(
            name=to_camel_case(ctor.name),
            parameters=params,
            return_type=self.class_name,
            statements=statements,
            is_static=True,
        )


def _ownership(ctor: NormalizedConstructor) -> str:
    return "full" if ctor.return_type.transfer_ownership == "full" else "none"
