"""Assemble the query class and the module that wraps it.

The constructor takes the context factory plus three service handles.
The factory is stored in a private field and the services are forwarded to
the base type's constructor unmodified.
"""

from __future__ import annotations

from typing import Iterable

from .config import GeneratorConfig
from .model import ClassSpec, FieldSpec, MethodSpec, ModuleSpec, Parameter
from .naming import field_name

# Namespace providing IDbContextFactory and AsNoTracking
DATA_ACCESS_NAMESPACE = "Microsoft.EntityFrameworkCore"

FACTORY_PARAMETER = "dbContextFactory"
FACTORY_FIELD = field_name(FACTORY_PARAMETER)

# (type, identifier) pairs forwarded to the base constructor
_SERVICE_PARAMETERS: tuple[tuple[str, str], ...] = (
    ("ICacheService", "cacheService"),
    ("IHttpContextAccessor", "httpContextAccessor"),
    ("IConfiguration", "configuration"),
)


def factory_type(config: GeneratorConfig) -> str:
    return f"IDbContextFactory<{config.schema_identity.schema_name}>"


def _import_sort_key(name: str) -> tuple[int, str]:
    is_system = name == "System" or name.startswith("System.")
    return (0 if is_system else 1, name)


def resolve_imports(config: GeneratorConfig) -> tuple[str, ...]:
    """Configured usings plus the data-access and entity-model namespaces.

    Deduplicated and sorted with System namespaces first.
    """
    names = set(config.usings)
    names.add(DATA_ACCESS_NAMESPACE)
    names.add(config.entity_model_namespace)
    return tuple(sorted(names, key=_import_sort_key))


def provenance_comment(config: GeneratorConfig) -> str:
    return (
        f"<auto-generated> Generated by querygen from "
        f"{config.schema_identity.schema_name}. Do not edit by hand. </auto-generated>"
    )


def assemble_class(methods: Iterable[MethodSpec], config: GeneratorConfig) -> ClassSpec:
    factory = factory_type(config)
    parameters = (Parameter(type=factory, identifier=FACTORY_PARAMETER),) + tuple(
        Parameter(type=t, identifier=ident) for t, ident in _SERVICE_PARAMETERS
    )
    return ClassSpec(
        type_name=config.class_name,
        base_type_name=config.base_type_name,
        constructor_parameters=parameters,
        factory_field=FieldSpec(type=factory, identifier=FACTORY_FIELD),
        methods=tuple(methods),
    )


def build_module(methods: Iterable[MethodSpec], config: GeneratorConfig) -> ModuleSpec:
    return ModuleSpec(
        namespace=config.namespace,
        imports=resolve_imports(config),
        provenance_comment=provenance_comment(config),
        cls=assemble_class(methods, config),
    )
