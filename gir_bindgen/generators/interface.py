from __future__ import annotations

from typing import List, Set

from ..context import GenerationContext
from ..gir.model import NormalizedInterface, NormalizedMethod
from ..gir.repository import Repository
from ..naming import generate_conflicting_method_name, to_pascal_case
from ..structures import ClassStructure, PropertyStructure, SourceFile
from ..type_mapper import TypeMapper
from ..writers import Writers
from ..writers.imports import ImportsBuilder, ImportsOptions
from .method import MethodBuilder


class InterfaceGenerator:
    def __init__(
        self,
        iface: NormalizedInterface,
        mapper: TypeMapper,
        ctx: GenerationContext,
        repository: Repository,
        writers: Writers,
        namespace: str,
        shared_library: str,
    ):
        self.iface = iface
        self.ctx = ctx
        self.repository = repository
        self.namespace = namespace
        self.method_builder = MethodBuilder(mapper, ctx, writers, shared_library)
        self.interface_name = to_pascal_case(iface.name)

    def generate(self) -> SourceFile:
        iface = self.iface
        self.ctx.uses_native_object = True

        class_structure = ClassStructure(name=self.interface_name, extends="NativeObject")
        if iface.glib_type_name:
            class_structure.add_members(
                [
                    PropertyStructure(
                        name="glibTypeName",
                        type="string",
                        initializer=f'"{iface.glib_type_name}"',
                        is_static=True,
                        is_readonly=True,
                    ),
                    PropertyStructure(
                        name="objectType",
                        initializer='"interface" as const',
                        is_static=True,
                        is_readonly=True,
                    ),
                ]
            )

        prerequisite_methods = self.collect_prerequisite_methods({m.name for m in iface.methods})
        class_structure.add_members(self.method_builder.build_structures(iface.methods))
        class_structure.add_members(self.method_builder.build_structures(prerequisite_methods))

        source_file = SourceFile()
        source_file.add_statement(class_structure)
        source_file.imports = ImportsBuilder(
            self.ctx, ImportsOptions(namespace=self.namespace, current_class_name=iface.name)
        ).collect_imports()
        return source_file

    def collect_prerequisite_methods(self, existing_method_names: Set[str]) -> List[NormalizedMethod]:
        """
        Methods of every interface prerequisite, deepest first. A name that
        is already taken is kept under `<prerequisite>_<method>`.
        """
        methods = []
        seen_names = set(existing_method_names)
        visited = set()

        def collect(name: str) -> None:
            if name in visited:
                return
            visited.add(name)
            prereq = self.repository.resolve_interface(name)
            if prereq is None:
                return
            for nested in prereq.prerequisites:
                collect(nested)
            for method in prereq.methods:
                if method.name in seen_names:
                    self.ctx.method_renames[method.c_identifier] = generate_conflicting_method_name(
                        prereq.name, method.name
                    )
                else:
                    seen_names.add(method.name)
                methods.append(method)

        for name in self.iface.prerequisites:
            collect(name)
        return methods
