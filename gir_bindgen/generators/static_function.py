from __future__ import annotations

from typing import List

from ..context import GenerationContext
from ..gir.model import NormalizedClass
from ..naming import normalize_class_name
from ..structures import MethodStructure
from ..type_mapper import TypeMapper
from ..writers import Writers


class StaticFunctionBuilder:
    def __init__(
        self,
        cls: NormalizedClass,
        mapper: TypeMapper,
        ctx: GenerationContext,
        writers: Writers,
        namespace: str,
        shared_library: str,
    ):
        self.cls = cls
        self.mapper = mapper
        self.ctx = ctx
        self.method_body = writers.method_body
        self.shared_library = shared_library
        self.class_name = normalize_class_name(cls.name, namespace)

    def build_structures(self) -> List[MethodStructure]:
        structures = []
        seen = set()
        for func in self.cls.static_functions:
            if func.c_identifier in seen:
                continue
            seen.add(func.c_identifier)
            if self.method_body.has_unsupported_callbacks(func.parameters):
                continue
            structures.append(
                self.method_body.build_static_function_structure(
                    func, self.class_name, self.cls.name, self.shared_library
                )
            )
        return structures
