from __future__ import annotations

import re

CLASS_NAME_RENAMES = {
    ("GObject", "Object"): "GObject",
    ("GLib", "Error"): "GError",
}

RESERVED_WORDS = {
    "arguments",
    "await",
    "break",
    "case",
    "catch",
    "class",
    "const",
    "continue",
    "debugger",
    "default",
    "delete",
    "do",
    "else",
    "enum",
    "eval",
    "export",
    "extends",
    "false",
    "finally",
    "for",
    "function",
    "if",
    "implements",
    "import",
    "in",
    "instanceof",
    "interface",
    "let",
    "new",
    "null",
    "package",
    "private",
    "protected",
    "public",
    "return",
    "static",
    "super",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "var",
    "void",
    "while",
    "with",
    "yield",
}

SEPARATOR_PATTERN = re.compile(r"[_\-]+")


def to_camel_case(name: str) -> str:
    words = [word for word in SEPARATOR_PATTERN.split(name) if word]
    if not words:
        return ""
    return words[0] + "".join(word[:1].upper() + word[1:] for word in words[1:])


def to_pascal_case(name: str) -> str:
    camel = to_camel_case(name)
    return camel[:1].upper() + camel[1:]


def to_snake_case(name: str) -> str:
    result = []
    i = 0
    n = len(name)
    while i < n:
        if name[i].isupper():
            if i > 0 and result[-1] != "_":
                result.append("_")
            start = i
            if i + 1 < n and name[i + 1].islower():
                while i + 1 < n and name[i + 1].islower():
                    i += 1
            else:
                while i + 1 < n and name[i + 1].isupper():
                    i += 1
                if i + 1 < n and name[i + 1].islower():
                    i -= 1
            result.append(name[start : i + 1].lower())
        elif name[i] == "-":
            result.append("_")
        else:
            result.append(name[i])
        i += 1
    return "".join(result)


def to_kebab_case(name: str) -> str:
    return to_snake_case(name).replace("_", "-")


def to_macro_case(name: str) -> str:
    return to_snake_case(name).upper()


def to_valid_identifier(name: str) -> str:
    if name in RESERVED_WORDS:
        return name + "_"
    if name[:1].isdigit():
        return "_" + name
    return name


def normalize_class_name(name: str, namespace: str | None = None) -> str:
    if namespace is not None:
        renamed = CLASS_NAME_RENAMES.get((namespace, name))
        if renamed is not None:
            return renamed
    return to_pascal_case(name)


def generate_conflicting_method_name(owner_name: str, method_name: str) -> str:
    return to_camel_case(f"{to_snake_case(owner_name)}_{method_name}")
