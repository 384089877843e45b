"""Run the generator end to end.

Schema source -> resolver -> synthesizer -> assembler -> renderer -> file.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from .assembler import build_module
from .codegen import render_module, write_output
from .config import GeneratorConfig
from .errors import OutputError
from .loader import open_container
from .model import GenerationResult, SchemaSnapshot
from .resolver import resolve
from .schema_parser import ContainerSchemaSource, SchemaSource, read_schema
from .synthesizer import synthesize_methods

logger = logging.getLogger(__name__)


def generate_source(snapshot: SchemaSnapshot, config: GeneratorConfig) -> GenerationResult:
    """Build and render the query class for a schema snapshot."""
    resolution = resolve(snapshot, config.schema_identity.schema_name)
    methods = synthesize_methods(resolution.pairs, config)
    module = build_module(methods, config)
    text = render_module(module)
    return GenerationResult(text=text, module=module, resolution=resolution)


def generate(config: GeneratorConfig, source: SchemaSource | None = None) -> GenerationResult:
    """Read the schema and render it.

    Without an explicit source the configured container is opened only for
    the duration of the read.
    """
    schema_name = config.schema_identity.schema_name
    extra = {"schema": schema_name}
    if source is None:
        with open_container(config.schema_identity) as container:
            snapshot = read_schema(ContainerSchemaSource(container), schema_name)
    else:
        snapshot = read_schema(source, schema_name)

    result = generate_source(snapshot, config)
    logger.info(
        "Rendered %d query methods (%d unmatched entities)",
        len(result.module.cls.methods), len(result.resolution.unmatched), extra=extra,
    )
    return result


def run(config: GeneratorConfig, source: SchemaSource | None = None) -> GenerationResult:
    """Generate and write the output file.

    A write failure is logged and recorded on the result; the rendered text
    is still returned.
    """
    result = generate(config, source)
    try:
        path = write_output(result.text, Path(config.directory_name), config.file_name)
    except OutputError as exc:
        logger.error("%s", exc, extra={"schema": config.schema_identity.schema_name})
        return dataclasses.replace(result, output_error=str(exc))
    return dataclasses.replace(result, output_path=str(path))
