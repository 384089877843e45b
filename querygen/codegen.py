"""Render the module structure and write generated output.

Takes the ModuleSpec from the assembler and produces Query.cs.
"""

from __future__ import annotations

import logging
from pathlib import Path

import jinja2

from .errors import OutputError, SynthesisError
from .model import ModuleSpec
from .naming import is_identifier, is_qualified_name, is_type_name

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "query.cs.j2"


def _check(ok: bool, what: str, value: str) -> None:
    if not ok:
        raise SynthesisError(f"Invalid {what}: {value!r}")


def validate_module(module: ModuleSpec) -> None:
    """Reject structures that would not render to valid C#."""
    _check("\n" not in module.provenance_comment, "provenance comment", module.provenance_comment)
    _check(is_qualified_name(module.namespace), "namespace", module.namespace)
    for name in module.imports:
        _check(is_qualified_name(name), "using directive", name)

    cls = module.cls
    _check(is_identifier(cls.type_name), "class name", cls.type_name)
    _check(is_type_name(cls.base_type_name), "base type", cls.base_type_name)
    _check(is_type_name(cls.factory_field.type), "field type", cls.factory_field.type)
    _check(is_identifier(cls.factory_field.identifier), "field name", cls.factory_field.identifier)
    if not cls.constructor_parameters:
        raise SynthesisError("Constructor must take the context factory parameter")
    for param in cls.constructor_parameters:
        _check(is_type_name(param.type), "parameter type", param.type)
        _check(is_identifier(param.identifier), "parameter name", param.identifier)

    seen: set[str] = set()
    for method in cls.methods:
        _check(is_identifier(method.name), "method name", method.name)
        if method.name in seen:
            raise SynthesisError(f"Duplicate method name: {method.name!r}")
        seen.add(method.name)
        _check(is_type_name(method.return_type), "return type", method.return_type)
        _check(is_identifier(method.body.accessor_name), "accessor name", method.body.accessor_name)
        _check(is_type_name(method.body.entity_name), "entity name", method.body.entity_name)
        _check(is_identifier(method.body.context_variable), "variable name", method.body.context_variable)
        _check(is_identifier(method.body.factory_field), "field name", method.body.factory_field)
        _check(is_identifier(method.body.helper_name), "helper name", method.body.helper_name)
        for annotation in method.annotations:
            _check(is_qualified_name(annotation), "attribute", annotation)
        _check("\n" not in method.doc_summary, "doc summary", method.doc_summary)


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render_module(module: ModuleSpec) -> str:
    """Validate and render a module to C# source text."""
    validate_module(module)
    try:
        template = _environment().get_template(TEMPLATE_NAME)
        return template.render(module=module)
    except jinja2.TemplateError as exc:
        raise SynthesisError(f"Failed to render {TEMPLATE_NAME}: {exc}") from exc


def write_output(text: str, directory: Path, file_name: str) -> Path:
    """Write fully rendered source to directory/file_name, creating the directory."""
    output_path = directory / file_name
    try:
        directory.mkdir(parents=True, exist_ok=True)
        output_path.write_text(text, encoding="utf-8")
    except (OSError, ValueError) as exc:
        raise OutputError(f"Cannot write {output_path}: {exc}", path=str(output_path)) from exc

    logger.info("Generated %s", output_path)
    return output_path
