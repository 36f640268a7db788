from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional, Set

from ..config import GeneratorConfig
from ..context import GenerationContext
from ..gir.model import NormalizedClass, NormalizedMethod, parse_qualified_name
from ..gir.repository import Repository
from ..naming import (generate_conflicting_method_name, normalize_class_name,
                      to_camel_case)
from ..structures import ClassStructure, PropertyStructure, SourceFile
from ..type_mapper import TypeMapper
from ..writers import Writers
from ..writers.imports import ImportsBuilder, ImportsOptions
from .constructor import ConstructorBuilder
from .method import MethodBuilder
from .signal import SignalBuilder
from .static_function import StaticFunctionBuilder
from .widget_meta import CodegenWidgetMeta, WidgetMetaBuilder

logger = logging.getLogger(__name__)


@dataclass
class ParentInfo:
    has_parent: bool
    class_name: Optional[str] = None
    original_name: Optional[str] = None
    namespace: Optional[str] = None
    is_cross_namespace: bool = False

    @property
    def extends(self) -> Optional[str]:
        if not self.has_parent:
            return None
        if self.is_cross_namespace:
            return f"{self.namespace}.{self.class_name}"
        return self.class_name


def parse_parent_reference(parent: Optional[str], namespace: str) -> ParentInfo:
    if not parent:
        return ParentInfo(has_parent=False)
    if "." in parent:
        parent_namespace, name = parse_qualified_name(parent)
    else:
        parent_namespace, name = namespace, parent
    return ParentInfo(
        has_parent=True,
        class_name=normalize_class_name(name, parent_namespace),
        original_name=name,
        namespace=parent_namespace,
        is_cross_namespace=parent_namespace != namespace,
    )


@dataclass
class ClassGenerationResult:
    success: bool
    widget_meta: Optional[CodegenWidgetMeta] = None
    source_file: Optional[SourceFile] = None

    @property
    def text(self) -> Optional[str]:
        if self.source_file is None:
            return None
        return self.source_file.render()


class ClassGenerator:
    """
    Generates the TypeScript module for one GObject class.

    The class gets its constructors, factories, static functions, instance
    methods (its own plus those of implemented interfaces not provided
    elsewhere in the hierarchy), a typed `connect()` and, for widgets, the
    runtime WIDGET_META table.
    """

    def __init__(
        self,
        cls: NormalizedClass,
        mapper: TypeMapper,
        ctx: GenerationContext,
        repository: Repository,
        writers: Writers,
        config: GeneratorConfig,
    ):
        self.cls = cls
        self.mapper = mapper
        self.ctx = ctx
        self.repository = repository
        self.writers = writers
        self.config = config
        self.namespace = config.namespace
        self.class_name = normalize_class_name(cls.name, self.namespace)

        self.constructor_builder = ConstructorBuilder(
            cls, ctx, writers, self.namespace, config.shared_library, config.gobject_library
        )
        self.method_builder = MethodBuilder(mapper, ctx, writers, config.shared_library)
        self.static_builder = StaticFunctionBuilder(cls, mapper, ctx, writers, self.namespace, config.shared_library)
        self.signal_builder = SignalBuilder(
            cls, mapper, ctx, repository, writers, self.namespace, config.shared_library
        )
        self.widget_meta_builder = WidgetMetaBuilder(cls, repository, ctx, self.namespace)

    def can_generate(self) -> bool:
        if not self.cls.constructors:
            return True
        return any(not self.method_builder.has_unsupported_callbacks(c.parameters) for c in self.cls.constructors)

    def generate(self) -> ClassGenerationResult:
        if not self.can_generate():
            logger.debug("%s has no usable constructor", self.cls.qualified_name)
            return ClassGenerationResult(success=False)

        parent_method_names = self.collect_parent_method_names()
        interface_methods = self.collect_interface_methods(parent_method_names)
        class_methods = self.filter_class_methods(parent_method_names)

        parent = parse_parent_reference(self.cls.parent, self.namespace)
        is_param_spec = self.is_param_spec_class()

        class_structure = ClassStructure(name=self.class_name, extends=parent.extends)
        if not parent.has_parent:
            class_structure.extends = "NativeObject"
            self.ctx.uses_native_object = True

        class_structure.add_members(self._static_properties(parent.has_parent, is_param_spec))
        class_structure.add_members(self.signal_builder.build_connect_method_structures())

        self.constructor_builder.parent_factory_method_names = self.collect_parent_factory_method_names()
        constructors, factories = self.constructor_builder.build(parent.has_parent)
        class_structure.add_members(constructors)
        class_structure.add_members(factories)
        class_structure.add_members(self.static_builder.build_structures())
        class_structure.add_members(self.method_builder.build_structures(class_methods, is_param_spec))
        for methods in interface_methods.values():
            class_structure.add_members(self.method_builder.build_structures(methods, is_param_spec))

        self.widget_meta_builder.set_signal_entries(self.signal_builder.build_signal_meta_entries())
        self.widget_meta_builder.add_to_class(class_structure)

        source_file = SourceFile()
        source_file.add_statement(class_structure)
        if self.cls.glib_type_name:
            self.ctx.uses_register_native_class = True
            source_file.add_statement(f"registerNativeClass({self.class_name});")

        source_file.imports = ImportsBuilder(
            self.ctx,
            ImportsOptions(
                namespace=self.namespace,
                current_class_name=self.cls.name,
                parent_class_name=parent.class_name,
                parent_original_name=parent.original_name,
                parent_namespace=parent.namespace if parent.is_cross_namespace else None,
            ),
        ).collect_imports()

        return ClassGenerationResult(
            success=True,
            widget_meta=self.widget_meta_builder.build_codegen_widget_meta(),
            source_file=source_file,
        )

    def collect_parent_method_names(self) -> Set[str]:
        names = set()
        parent = self.cls.get_parent()
        if parent is None:
            return names
        names.update(m.name for m in parent.get_all_methods())
        for iface_name in parent.get_all_implemented_interfaces():
            iface = self.repository.resolve_interface(iface_name)
            if iface is not None:
                names.update(m.name for m in iface.methods)
        return names

    def collect_parent_factory_method_names(self) -> Set[str]:
        names = set()
        parent = self.cls.get_parent()
        while parent is not None:
            names.update(to_camel_case(c.name) for c in parent.constructors)
            names.update(to_camel_case(f.name) for f in parent.static_functions)
            parent = parent.get_parent()
        return names

    def collect_interface_methods(self, parent_method_names: Set[str]) -> OrderedDict[str, List[NormalizedMethod]]:
        class_method_names = {m.name for m in self.cls.methods}
        seen = set()
        by_namespace: OrderedDict[str, List[NormalizedMethod]] = OrderedDict()

        for iface_name in self.cls.implements:
            iface = self.repository.resolve_interface(iface_name)
            if iface is None:
                continue
            source_namespace = parse_qualified_name(iface_name)[0] if "." in iface_name else self.namespace

            for method in iface.methods:
                if method.name in class_method_names or method.name in parent_method_names:
                    continue
                if method.name in seen:
                    self.ctx.method_renames[method.c_identifier] = generate_conflicting_method_name(
                        iface.name, method.name
                    )
                else:
                    seen.add(method.name)
                by_namespace.setdefault(source_namespace, []).append(method)

        return by_namespace

    def filter_class_methods(self, parent_method_names: Set[str]) -> List[NormalizedMethod]:
        for method in self.cls.methods:
            if method.name in parent_method_names or (method.name == "connect" and self.cls.parent):
                self.ctx.method_renames[method.c_identifier] = generate_conflicting_method_name(
                    self.cls.name, method.name
                )
        return list(self.cls.methods)

    def is_param_spec_class(self) -> bool:
        current = self.cls
        while current is not None:
            if current.name == "ParamSpec" or current.glib_type_name == "GParam":
                return True
            current = current.get_parent()
        return False

    def _static_properties(self, has_parent: bool, is_param_spec: bool) -> List[PropertyStructure]:
        if not self.cls.glib_type_name:
            return []
        object_type = "gparam" if is_param_spec else "gobject"
        return [
            PropertyStructure(
                name="glibTypeName",
                type="string",
                initializer=f'"{self.cls.glib_type_name}"',
                is_static=True,
                is_readonly=True,
                has_override_keyword=has_parent,
            ),
            PropertyStructure(
                name="objectType",
                initializer=f'"{object_type}" as const',
                is_static=True,
                is_readonly=True,
                has_override_keyword=has_parent,
            ),
        ]
