"""Identifier rules and naming conventions for generated C# code.

Conventions:
  - accessor Customers        -> method GetCustomers
  - prefix dbContext          -> context variable dbContext_Customers
  - parameter dbContextFactory -> field _dbContextFactory

Accessor names are used verbatim; no pluralization or casing changes.
"""

from __future__ import annotations

import re

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# Reserved C# keywords (contextual keywords are valid identifiers)
CSHARP_KEYWORDS: frozenset[str] = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params",
    "private", "protected", "public", "readonly", "ref", "return", "sbyte",
    "sealed", "short", "sizeof", "stackalloc", "static", "string", "struct",
    "switch", "this", "throw", "true", "try", "typeof", "uint", "ulong",
    "unchecked", "unsafe", "ushort", "using", "virtual", "void", "volatile",
    "while",
})

# Keywords that name built-in types
PREDEFINED_TYPES: frozenset[str] = frozenset({
    "bool", "byte", "char", "decimal", "double", "float", "int", "long",
    "object", "sbyte", "short", "string", "uint", "ulong", "ushort",
})


def is_identifier(name: str) -> bool:
    """Check that a name is a plain, non-keyword C# identifier."""
    return bool(_IDENTIFIER.fullmatch(name)) and name not in CSHARP_KEYWORDS


def is_qualified_name(name: str) -> bool:
    """Check a dotted name such as a namespace."""
    return all(is_identifier(part) for part in name.split("."))


def _split_type_arguments(text: str) -> list[str]:
    """Split generic arguments on top-level commas."""
    args: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(text):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(text[start:i])
            start = i + 1
    args.append(text[start:])
    return args


def is_type_name(expr: str) -> bool:
    """Check a type expression: a qualified name with optional generic arguments."""
    head, sep, rest = expr.partition("<")
    if not sep:
        return expr in PREDEFINED_TYPES or is_qualified_name(expr)
    if not rest.endswith(">"):
        return False
    return is_qualified_name(head) and all(
        is_type_name(arg.strip(" ")) for arg in _split_type_arguments(rest[:-1])
    )


def lower_camel(name: str) -> str:
    return name[:1].lower() + name[1:]


def build_method_name(accessor_name: str) -> str:
    return f"Get{accessor_name}"


def context_variable_name(prefix: str, accessor_name: str) -> str:
    return f"{prefix}_{accessor_name}"


def field_name(parameter_name: str) -> str:
    """Private field backing a constructor parameter."""
    return f"_{lower_camel(parameter_name)}"
