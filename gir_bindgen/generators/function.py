from __future__ import annotations

from typing import Iterable, List

from ..context import GenerationContext
from ..gir.model import NormalizedFunction
from ..naming import to_camel_case, to_valid_identifier
from ..structures import CodeWriter, SourceFile
from ..type_mapper import TypeMapper
from ..writers import Writers
from ..writers.imports import ImportsBuilder, ImportsOptions
from ..writers.method_body import format_nullable_return


class FunctionGenerator:
    """Namespace-level functions, emitted as exported arrow-function constants."""

    def __init__(
        self,
        functions: Iterable[NormalizedFunction],
        mapper: TypeMapper,
        ctx: GenerationContext,
        writers: Writers,
        namespace: str,
        shared_library: str,
    ):
        self.functions = list(functions)
        self.mapper = mapper
        self.ctx = ctx
        self.method_body = writers.method_body
        self.namespace = namespace
        self.shared_library = shared_library

    def supported_functions(self) -> List[NormalizedFunction]:
        return [f for f in self.functions if not self.method_body.has_unsupported_callbacks(f.parameters)]

    def generate(self) -> SourceFile:
        source_file = SourceFile()
        seen = set()
        for func in self.supported_functions():
            if func.c_identifier in seen:
                continue
            seen.add(func.c_identifier)
            source_file.add_statement("\n".join(self.build_function(func)))
        source_file.imports = ImportsBuilder(self.ctx, ImportsOptions(namespace=self.namespace)).collect_imports()
        return source_file

    def build_function(self, func: NormalizedFunction) -> List[str]:
        name = to_valid_identifier(to_camel_case(func.name))
        params = ", ".join(p.render() for p in self.method_body.build_parameter_list(func.parameters))
        return_mapping = self.mapper.map_type(func.return_type, True, func.return_type.transfer_ownership)
        self.ctx.add_type_imports(return_mapping.imports)

        ts_return = format_nullable_return(return_mapping.ts, func.return_type.nullable)
        signature = f"export const {name} = ({params})"
        if ts_return != "void":
            signature += f": {ts_return}"

        w = CodeWriter()
        with w.block(f"{signature} =>", "};"):
            w.extend(self.method_body.write_function_body(func, return_mapping, self.shared_library))
        return w.lines
