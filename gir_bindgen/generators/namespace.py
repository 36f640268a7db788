from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Dict, List, Set

from ..config import GeneratorConfig
from ..context import GenerationContext
from ..gir.model import NormalizedClass, NormalizedRecord, parse_qualified_name
from ..gir.repository import Repository
from ..naming import normalize_class_name, to_kebab_case, to_pascal_case
from ..structures import (ClassStructure, ImportDeclaration, MethodStructure,
                          ParameterStructure, PropertyStructure, SourceFile)
from ..type_mapper import TypeMapper
from ..writers import create_writers
from ..writers.imports import NATIVE_BASE_MODULE
from .class_generator import ClassGenerator
from .constant import ConstantGenerator
from .enum import EnumGenerator
from .function import FunctionGenerator
from .interface import InterfaceGenerator
from .record import RecordGenerator, is_generated_record
from .widget_meta import (ClassMetaBuilder, CodegenControllerMeta,
                          CodegenWidgetMeta)

logger = logging.getLogger(__name__)

STUB_GTYPE_STRUCTS = {"TypeClass", "TypeInterface", "EnumClass", "FlagsClass", "ObjectClass", "AttrClass"}


def is_stub_record(record: NormalizedRecord) -> bool:
    if record.glib_type_name:
        return True
    if record.name.endswith("Private"):
        return False
    if record.name in STUB_GTYPE_STRUCTS:
        return True
    return not record.is_gtype_struct()


def sort_classes(classes: List[NormalizedClass]) -> List[NormalizedClass]:
    by_name = {cls.name: cls for cls in classes}
    result = []
    visited = set()

    def visit(cls: NormalizedClass) -> None:
        if cls.name in visited:
            return
        visited.add(cls.name)
        if cls.parent:
            parent_name = parse_qualified_name(cls.parent)[1] if "." in cls.parent else cls.parent
            parent = by_name.get(parent_name)
            if parent is not None:
                visit(parent)
        result.append(cls)

    for cls in classes:
        visit(cls)
    return result


def module_file_name(name: str) -> str:
    return f"{to_kebab_case(name)}.ts"


class NamespaceGenerator:
    """
    Generates every module of one namespace.

    Each output file is built against its own GenerationContext, so the
    imports of one file never leak into another. The type mapper is shared:
    it knows the namespace's enums and records, and classes that could not
    be generated, which later references map to `unknown`.
    """

    def __init__(self, repository: Repository, config: GeneratorConfig):
        self.repository = repository
        self.config = config
        self.namespace = config.namespace
        self.mapper = TypeMapper(repository, config.namespace, config.shared_library)
        self.widget_metas: List[CodegenWidgetMeta] = []
        self.controller_metas: List[CodegenControllerMeta] = []
        self.skipped_classes: List[str] = []
        self._record_files: Dict[str, str] = {}
        self._interface_files: Dict[str, str] = {}

    def generate(self) -> OrderedDict[str, str]:
        ns = self.repository.get_namespace(self.namespace)
        assert ns is not None
        logger.info("generating namespace %s (%s)", self.namespace, self.config.shared_library)

        files: OrderedDict[str, str] = OrderedDict()

        enums = list(ns.enumerations.values()) + list(ns.bitfields.values())
        for enum in ns.enumerations.values():
            self.mapper.register_enum(enum.name)
        for flags in ns.bitfields.values():
            self.mapper.register_enum(flags.name, is_flags=True)
        if enums:
            files["enums.ts"] = EnumGenerator(enums).generate().render()

        for record in ns.records.values():
            if is_generated_record(record) or is_stub_record(record):
                transformed = normalize_class_name(record.name, self.namespace)
                self.mapper.register_record(record.name, transformed, record.glib_type_name)
                self._record_files[transformed] = record.name
        for iface in ns.interfaces.values():
            self._interface_files[to_pascal_case(iface.name)] = iface.name

        for record in ns.records.values():
            if is_generated_record(record):
                ctx, writers = self._new_unit()
                generator = RecordGenerator(
                    record, self.mapper, ctx, writers, self.namespace, self.config.shared_library
                )
                files[module_file_name(record.name)] = generator.generate().render()
            elif is_stub_record(record):
                files[module_file_name(record.name)] = self.build_stub_record(record).render()

        classes = sort_classes(list(ns.classes.values()))
        skipped = self.register_skipped_classes(classes)

        for cls in classes:
            if cls.name in skipped:
                continue
            ctx, writers = self._new_unit()
            result = ClassGenerator(cls, self.mapper, ctx, self.repository, writers, self.config).generate()
            assert result.success
            files[module_file_name(cls.name)] = result.text
            if result.widget_meta is not None:
                self.widget_metas.append(result.widget_meta)
            controller_meta = ClassMetaBuilder(cls, self.repository, self.namespace).build_codegen_controller_meta()
            if controller_meta is not None:
                self.controller_metas.append(controller_meta)

        for iface in ns.interfaces.values():
            ctx, writers = self._new_unit()
            generator = InterfaceGenerator(
                iface, self.mapper, ctx, self.repository, writers, self.namespace, self.config.shared_library
            )
            files[module_file_name(iface.name)] = generator.generate().render()

        if ns.functions:
            ctx, writers = self._new_unit()
            generator = FunctionGenerator(
                ns.functions.values(), self.mapper, ctx, writers, self.namespace, self.config.shared_library
            )
            files["functions.ts"] = generator.generate().render()

        if ns.constants:
            files["constants.ts"] = ConstantGenerator(ns.constants.values()).generate().render()

        files["index.ts"] = self.build_index(files.keys())

        logger.info(
            "generated %d file(s) for %s, skipped %d class(es)",
            len(files),
            self.namespace,
            len(self.skipped_classes),
        )
        return files

    def register_skipped_classes(self, classes: List[NormalizedClass]) -> Set[str]:
        """
        Marks every class without a usable constructor before any file is
        generated, so references to it map to `unknown` wherever they occur.
        """
        skipped = set()
        for cls in classes:
            ctx, writers = self._new_unit()
            if ClassGenerator(cls, self.mapper, ctx, self.repository, writers, self.config).can_generate():
                continue
            logger.warning("skipping class %s: no supported constructor", cls.qualified_name)
            self.mapper.register_skipped_class(cls.name)
            self.skipped_classes.append(cls.qualified_name)
            skipped.add(cls.name)
        return skipped

    def build_stub_record(self, record: NormalizedRecord) -> SourceFile:
        name = normalize_class_name(record.name, self.namespace)
        class_structure = ClassStructure(name=name, extends="NativeObject", docs=(
            f"Stub class for {record.name} (opaque type not fully generated)"
        ))
        if record.glib_type_name:
            class_structure.add_members(
                [
                    PropertyStructure(
                        name="glibTypeName",
                        type="string",
                        initializer=f'"{record.glib_type_name}"',
                        is_static=True,
                        is_readonly=True,
                    )
                ]
            )
        class_structure.add_members(
            [
                PropertyStructure(name="objectType", initializer='"boxed" as const', is_static=True, is_readonly=True),
                MethodStructure(
                    name="fromPtr",
                    parameters=[ParameterStructure("ptr", "unknown")],
                    return_type=name,
                    statements=[
                        f"const instance = Object.create({name}.prototype) as {name};",
                        "instance.id = ptr;",
                        "return instance;",
                    ],
                    is_static=True,
                ),
            ]
        )
        return SourceFile(imports=[ImportDeclaration(NATIVE_BASE_MODULE, ["NativeObject"])], statements=[class_structure])

    def build_index(self, file_names) -> str:
        modules = sorted(name[: -len(".ts")] for name in file_names if name != "index.ts")
        return "".join(f'export * from "./{module}.js";\n' for module in modules)

    def _new_unit(self):
        ctx = GenerationContext()
        ctx.record_name_to_file.update(self._record_files)
        ctx.interface_name_to_file.update(self._interface_files)
        writers = create_writers(
            self.mapper, ctx, shared_library=self.config.shared_library, glib_library=self.config.glib_library
        )
        return ctx, writers
