"""Match each entity to the accessor binding that exposes it.

Matching compares shapes for exact equality, never names. When several
accessors expose the same shape the first one in accessor order wins.
"""

from __future__ import annotations

import logging

from .model import EntityDescriptor, MatchedPair, Resolution, SchemaSnapshot

logger = logging.getLogger(__name__)


def resolve(snapshot: SchemaSnapshot, schema_name: str = "-") -> Resolution:
    """Pair entities with accessor names, in entity order."""
    extra = {"schema": schema_name}
    pairs: list[MatchedPair] = []
    unmatched: list[EntityDescriptor] = []
    ambiguous: list[tuple[EntityDescriptor, tuple[str, ...]]] = []

    for entity in snapshot.entities:
        candidates = tuple(
            b.name for b in snapshot.bindings if b.element_shape == entity.shape
        )
        if not candidates:
            logger.warning(
                "No accessor exposes entity %s, skipping", entity.name, extra=extra,
            )
            unmatched.append(entity)
            continue
        if len(candidates) > 1:
            logger.warning(
                "Entity %s is exposed by %s, using %s",
                entity.name, ", ".join(candidates), candidates[0], extra=extra,
            )
            ambiguous.append((entity, candidates))
        pairs.append(MatchedPair(entity=entity, accessor_name=candidates[0]))

    return Resolution(
        pairs=tuple(pairs), unmatched=tuple(unmatched), ambiguous=tuple(ambiguous),
    )
