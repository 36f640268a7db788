from __future__ import annotations

import textwrap
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Union


class CodeWriter:
    def __init__(self, indent_level: int = 0):
        self.lines: List[str] = []
        self.indent_level = indent_level

    def line(self, text: str = "") -> CodeWriter:
        if text:
            self.lines.append("    " * self.indent_level + text)
        else:
            self.lines.append("")
        return self

    def extend(self, lines: Iterable[str]) -> CodeWriter:
        for text in lines:
            for part in text.split("\n"):
                self.line(part)
        return self

    @contextmanager
    def indented(self) -> Iterator[CodeWriter]:
        self.indent_level += 1
        try:
            yield self
        finally:
            self.indent_level -= 1

    @contextmanager
    def block(self, header: str, footer: str = "}") -> Iterator[CodeWriter]:
        self.line(f"{header} {{")
        with self.indented():
            yield self
        self.line(footer)

    def getvalue(self) -> str:
        return "\n".join(self.lines)


@dataclass
class ParameterStructure:
    name: str
    type: str
    has_question_token: bool = False
    initializer: Optional[str] = None
    is_rest: bool = False

    def render(self) -> str:
        if self.is_rest:
            return f"...{self.name}: {self.type}"
        if self.initializer is not None:
            if self.type:
                return f"{self.name}: {self.type} = {self.initializer}"
            return f"{self.name} = {self.initializer}"
        question = "?" if self.has_question_token else ""
        return f"{self.name}{question}: {self.type}"


@dataclass
class MethodOverload:
    parameters: List[ParameterStructure]
    return_type: Optional[str] = None


@dataclass
class MethodStructure:
    name: str
    parameters: List[ParameterStructure] = field(default_factory=list)
    return_type: Optional[str] = None
    statements: List[str] = field(default_factory=list)
    is_static: bool = False
    has_override_keyword: bool = False
    scope: Optional[str] = None
    overloads: List[MethodOverload] = field(default_factory=list)
    docs: Optional[str] = None
    accessor: Optional[str] = None

    def render(self) -> str:
        w = CodeWriter()
        if self.docs:
            w.extend(format_doc_comment(self.docs))
        for overload in self.overloads:
            w.line(self._signature(overload.parameters, overload.return_type) + ";")
        with w.block(self._signature(self.parameters, self.return_type)):
            w.extend(self.statements)
        return w.getvalue()

    def _signature(self, parameters: Sequence[ParameterStructure], return_type: Optional[str]) -> str:
        modifiers = []
        if self.scope is not None:
            modifiers.append(self.scope)
        if self.is_static:
            modifiers.append("static")
        if self.has_override_keyword:
            modifiers.append("override")
        if self.accessor is not None:
            modifiers.append(self.accessor)
        prefix = " ".join(modifiers + [self.name])
        params = ", ".join(p.render() for p in parameters)
        suffix = f": {return_type}" if return_type is not None else ""
        return f"{prefix}({params}){suffix}"


@dataclass
class ConstructorStructure:
    parameters: List[ParameterStructure] = field(default_factory=list)
    statements: List[str] = field(default_factory=list)
    overloads: List[MethodOverload] = field(default_factory=list)

    def render(self) -> str:
        w = CodeWriter()
        for overload in self.overloads:
            w.line(f"constructor({', '.join(p.render() for p in overload.parameters)});")
        with w.block(f"constructor({', '.join(p.render() for p in self.parameters)})"):
            w.extend(self.statements)
        return w.getvalue()


@dataclass
class PropertyStructure:
    name: str
    type: Optional[str] = None
    initializer: Optional[str] = None
    is_static: bool = False
    is_readonly: bool = False
    has_override_keyword: bool = False
    scope: Optional[str] = None

    def render(self) -> str:
        modifiers = []
        if self.scope is not None:
            modifiers.append(self.scope)
        if self.is_static:
            modifiers.append("static")
        if self.has_override_keyword:
            modifiers.append("override")
        if self.is_readonly:
            modifiers.append("readonly")
        text = " ".join(modifiers + [self.name])
        if self.type is not None:
            text += f": {self.type}"
        if self.initializer is not None:
            text += f" = {self.initializer}"
        return text + ";"


ClassMember = Union[PropertyStructure, ConstructorStructure, MethodStructure]


@dataclass
class ClassStructure:
    name: str
    extends: Optional[str] = None
    members: List[ClassMember] = field(default_factory=list)
    is_exported: bool = True
    is_abstract: bool = False
    docs: Optional[str] = None

    @property
    def properties(self) -> List[PropertyStructure]:
        return [m for m in self.members if isinstance(m, PropertyStructure)]

    @property
    def constructors(self) -> List[ConstructorStructure]:
        return [m for m in self.members if isinstance(m, ConstructorStructure)]

    @property
    def methods(self) -> List[MethodStructure]:
        return [m for m in self.members if isinstance(m, MethodStructure)]

    def add_members(self, members: Iterable[ClassMember]) -> None:
        self.members.extend(members)

    def get_method(self, name: str) -> Optional[MethodStructure]:
        return next((m for m in self.methods if m.name == name), None)

    def get_property(self, name: str) -> Optional[PropertyStructure]:
        return next((p for p in self.properties if p.name == name), None)

    def render(self) -> str:
        header = ""
        if self.is_exported:
            header += "export "
        if self.is_abstract:
            header += "abstract "
        header += f"class {self.name}"
        if self.extends is not None:
            header += f" extends {self.extends}"

        lines = []
        if self.docs:
            lines.extend(format_doc_comment(self.docs))
        lines.append(header + " {")
        for i, member in enumerate(self.members):
            if i != 0:
                lines.append("")
            lines.append(indent_ts_code(member.render(), 1))
        lines.append("}")
        return "\n".join(lines)


@dataclass
class ImportDeclaration:
    module_specifier: str
    named_imports: List[str] = field(default_factory=list)
    namespace_import: Optional[str] = None
    is_type_only: bool = False

    def render(self) -> str:
        type_prefix = "type " if self.is_type_only else ""
        if self.namespace_import is not None:
            return f'import {type_prefix}* as {self.namespace_import} from "{self.module_specifier}";'
        names = ", ".join(self.named_imports)
        return f'import {type_prefix}{{ {names} }} from "{self.module_specifier}";'


@dataclass
class SourceFile:
    imports: List[ImportDeclaration] = field(default_factory=list)
    statements: List[Union[ClassStructure, str]] = field(default_factory=list)

    def add_statement(self, statement: Union[ClassStructure, str]) -> None:
        self.statements.append(statement)

    def render(self) -> str:
        sections = []
        if self.imports:
            sections.append("\n".join(i.render() for i in self.imports))
        for statement in self.statements:
            if isinstance(statement, ClassStructure):
                sections.append(statement.render())
            else:
                sections.append(statement)
        return "\n\n".join(sections) + "\n"


def write_const_string_array(values: Sequence[str]) -> str:
    if not values:
        return "[] as const"
    return "[" + ", ".join(f'"{v}"' for v in values) + "] as const"


def write_object_or_empty(entries: Sequence[tuple]) -> str:
    if not entries:
        return "{}"
    lines = ["{"]
    for key, value in entries:
        lines.append(indent_ts_code(f'"{key}": {value},', 1))
    lines.append("}")
    return "\n".join(lines)


def format_doc_comment(text: str) -> List[str]:
    lines = ["/**"]
    for line in text.strip().splitlines():
        lines.append(f" * {line}".rstrip())
    lines.append(" */")
    return lines


def indent_ts_code(code: str, level: int, prologue: str = "") -> str:
    prefix = (level * 4) * " "
    return indent_code(code, prefix, prologue)


def indent_code(code: str, prefix: str, prologue: str = "") -> str:
    if not code:
        return ""
    return prologue + textwrap.indent(code, prefix, lambda line: line.strip() != "")
