"""Generator settings.

Settings are read from appsettings.json (PascalCase keys) and passed
explicitly into every stage of the pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_pascal

NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class Capability(str, Enum):
    """Cross-cutting query behaviors attached to every generated method."""
    PAGING = "paging"
    PROJECTION = "projection"
    FILTERING = "filtering"
    SORTING = "sorting"


# Attribute emitted for each capability
CAPABILITY_ATTRIBUTES: dict[Capability, str] = {
    Capability.PAGING: "UsePaging",
    Capability.PROJECTION: "UseProjection",
    Capability.FILTERING: "UseFiltering",
    Capability.SORTING: "UseSorting",
}

DEFAULT_CAPABILITIES: tuple[Capability, ...] = (
    Capability.PAGING,
    Capability.PROJECTION,
    Capability.FILTERING,
    Capability.SORTING,
)


class _Settings(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        protected_namespaces=(),
    )


class SchemaIdentity(_Settings):
    """Identifies the schema container to load and introspect."""
    schema_name: NonBlank
    connection_string: NonBlank
    module_location: NonBlank
    container_namespace: NonBlank


class GeneratorConfig(_Settings):
    namespace: NonBlank = "GraphQL"
    class_name: NonBlank = "Query"
    base_type_name: NonBlank = "QueryBase"
    schema_identity: SchemaIdentity = Field(alias="Schema")
    usings: list[NonBlank] = Field(default_factory=list)
    model_namespace: NonBlank | None = None
    query_capabilities: list[Capability] = Field(
        default_factory=lambda: list(DEFAULT_CAPABILITIES)
    )
    context_variable_prefix: NonBlank = "dbContext"
    query_helper_name: NonBlank = "ApplyQueryBehaviors"
    directory_name: NonBlank = "generated"
    file_name: NonBlank = "Query.cs"

    @property
    def entity_model_namespace(self) -> str:
        return self.model_namespace or self.schema_identity.container_namespace
