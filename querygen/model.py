"""Dataclasses for the generated program structure.

The pipeline builds a ModuleSpec -> ClassSpec -> MethodSpec tree and hands
it to the renderer in one piece. Every node is frozen and owns its children.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EntityDescriptor:
    """An entity exposed by the schema."""
    name: str
    shape: Any  # class object or fully-qualified type name


@dataclass(frozen=True)
class AccessorBinding:
    """A collection property on the schema container."""
    name: str
    element_shape: Any


@dataclass(frozen=True)
class SchemaSnapshot:
    entities: tuple[EntityDescriptor, ...] = ()
    bindings: tuple[AccessorBinding, ...] = ()


@dataclass(frozen=True)
class MatchedPair:
    entity: EntityDescriptor
    accessor_name: str


@dataclass(frozen=True)
class Resolution:
    """Outcome of matching entities to accessor bindings."""
    pairs: tuple[MatchedPair, ...] = ()
    unmatched: tuple[EntityDescriptor, ...] = ()
    # (entity, every candidate accessor name in binding order)
    ambiguous: tuple[tuple[EntityDescriptor, tuple[str, ...]], ...] = ()


@dataclass(frozen=True)
class MethodBody:
    """Parameters of the fixed query method body."""
    accessor_name: str
    entity_name: str
    factory_field: str
    context_variable: str
    helper_name: str


@dataclass(frozen=True)
class MethodSpec:
    name: str
    return_type: str
    annotations: tuple[str, ...]
    body: MethodBody
    doc_summary: str


@dataclass(frozen=True)
class Parameter:
    type: str
    identifier: str

    @property
    def declaration(self) -> str:
        return f"{self.type} {self.identifier}"


@dataclass(frozen=True)
class FieldSpec:
    type: str
    identifier: str


@dataclass(frozen=True)
class ClassSpec:
    """A generated query class.

    The first constructor parameter is the context factory, which is stored in
    ``factory_field``. The remaining parameters are forwarded to the base type.
    """
    type_name: str
    base_type_name: str
    constructor_parameters: tuple[Parameter, ...]
    factory_field: FieldSpec
    methods: tuple[MethodSpec, ...] = ()

    @property
    def factory_parameter(self) -> Parameter:
        return self.constructor_parameters[0]

    @property
    def forwarded_parameters(self) -> tuple[Parameter, ...]:
        return self.constructor_parameters[1:]


@dataclass(frozen=True)
class ModuleSpec:
    namespace: str
    imports: tuple[str, ...]
    provenance_comment: str
    cls: ClassSpec


@dataclass(frozen=True)
class GenerationResult:
    """Rendered source plus the diagnostics of the run that produced it."""
    text: str
    module: ModuleSpec
    resolution: Resolution = field(default_factory=Resolution)
    output_path: str | None = None
    output_error: str | None = None
