"""Shared fixtures for querygen tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from querygen.config import GeneratorConfig, SchemaIdentity
from querygen.schema_parser import StaticSchemaSource


# ---------------------------------------------------------------------------
# A loadable schema container module, written to tmp_path by fixtures
# ---------------------------------------------------------------------------

CONTAINER_MODULE = '''\
from __future__ import annotations

from typing import ClassVar, Generic, TypeVar

T = TypeVar("T")


class Query(Generic[T]):
    pass


class Customer:
    pass


class Order:
    pass


class Invoice:
    pass


class ShopContext:
    entity_types = (Customer, Order, Invoice)
    instances: ClassVar[list[ShopContext]] = []

    Customers: Query[Customer]
    Orders: list[Order]
    _cache: Query[Customer]
    name: str

    def __init__(self, connection_string):
        if not connection_string.startswith("Data Source="):
            raise ValueError("unsupported connection string")
        self.connection_string = connection_string
        self.closed = False
        ShopContext.instances.append(self)

    def close(self):
        self.closed = True
'''


@pytest.fixture
def container_module(tmp_path: Path) -> Path:
    path = tmp_path / "shop.py"
    path.write_text(CONTAINER_MODULE)
    return path


@pytest.fixture
def identity(container_module: Path) -> SchemaIdentity:
    return SchemaIdentity(
        schema_name="ShopContext",
        connection_string="Data Source=shop.db",
        module_location=str(container_module),
        container_namespace="Shop.Models",
    )


@pytest.fixture
def config(identity: SchemaIdentity) -> GeneratorConfig:
    return GeneratorConfig(schema_identity=identity)


@pytest.fixture
def make_source() -> Callable[..., StaticSchemaSource]:
    """Build a static schema source from (entity names, (accessor, entity) pairs).

    Usage::

        source = make_source(["Customer"], [("Customers", "Customer")])
    """
    def _make(entities: list[str], accessors: list[tuple[str, str]]) -> StaticSchemaSource:
        description: dict[str, Any] = {
            "entities": [{"name": name, "type": f"Shop.Models.{name}"} for name in entities],
            "accessors": [
                {"name": name, "elementType": f"Shop.Models.{element}"}
                for name, element in accessors
            ],
        }
        return StaticSchemaSource(description)
    return _make
