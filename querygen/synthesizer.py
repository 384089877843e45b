"""Build one query method specification per matched entity."""

from __future__ import annotations

from typing import Iterable

from .assembler import FACTORY_FIELD
from .config import CAPABILITY_ATTRIBUTES, Capability, GeneratorConfig
from .model import MatchedPair, MethodBody, MethodSpec
from .naming import build_method_name, context_variable_name


def method_annotations(capabilities: Iterable[Capability]) -> tuple[str, ...]:
    """Map capabilities to attribute names, keeping first-seen order."""
    return tuple(dict.fromkeys(CAPABILITY_ATTRIBUTES[c] for c in capabilities))


def synthesize_method(pair: MatchedPair, config: GeneratorConfig) -> MethodSpec:
    accessor = pair.accessor_name
    entity = pair.entity.name
    return MethodSpec(
        name=build_method_name(accessor),
        return_type=f"IQueryable<{entity}>",
        annotations=method_annotations(config.query_capabilities),
        body=MethodBody(
            accessor_name=accessor,
            entity_name=entity,
            factory_field=FACTORY_FIELD,
            context_variable=context_variable_name(config.context_variable_prefix, accessor),
            helper_name=config.query_helper_name,
        ),
        doc_summary=f"Gets the {accessor}.",
    )


def synthesize_methods(
    pairs: Iterable[MatchedPair], config: GeneratorConfig,
) -> tuple[MethodSpec, ...]:
    return tuple(synthesize_method(pair, config) for pair in pairs)
