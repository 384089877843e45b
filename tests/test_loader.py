"""Tests for loading settings and schema containers."""

from __future__ import annotations

import json
import sys

import pytest

from querygen.config import Capability, SchemaIdentity
from querygen.errors import ConfigurationError, SchemaResolutionError
from querygen.loader import load_config, load_schema_file, open_container

_SCHEMA = {
    "SchemaName": "ShopContext",
    "ConnectionString": "Data Source=shop.db",
    "ModuleLocation": "shop.py",
    "ContainerNamespace": "Shop.Models",
}


def _write(tmp_path, data) -> object:
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps(data))
    return path


class TestLoadConfig:

    def test_defaults(self, tmp_path):
        config = load_config(_write(tmp_path, {"Schema": _SCHEMA}))
        assert config.namespace == "GraphQL"
        assert config.class_name == "Query"
        assert config.base_type_name == "QueryBase"
        assert config.usings == []
        assert config.directory_name == "generated"
        assert config.file_name == "Query.cs"
        assert config.query_capabilities == [
            Capability.PAGING, Capability.PROJECTION, Capability.FILTERING, Capability.SORTING,
        ]
        assert config.entity_model_namespace == "Shop.Models"

    def test_pascal_case_keys(self, tmp_path):
        config = load_config(_write(tmp_path, {
            "Schema": _SCHEMA,
            "Namespace": "Shop.GraphQL",
            "BaseTypeName": "ShopQueryBase",
            "Usings": ["HotChocolate"],
            "QueryCapabilities": ["sorting", "paging"],
            "DirectoryName": "out",
            "FileName": "ShopQuery.cs",
        }))
        assert config.namespace == "Shop.GraphQL"
        assert config.base_type_name == "ShopQueryBase"
        assert config.usings == ["HotChocolate"]
        assert config.query_capabilities == [Capability.SORTING, Capability.PAGING]
        assert config.schema_identity.schema_name == "ShopContext"
        assert config.directory_name == "out"
        assert config.file_name == "ShopQuery.cs"

    def test_overrides(self, tmp_path):
        config = load_config(_write(tmp_path, {"Schema": _SCHEMA}), Namespace="Other")
        assert config.namespace == "Other"

    def test_missing_file_needs_schema(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert "Schema" in exc_info.value.fields

    def test_missing_connection_string(self, tmp_path):
        schema = {k: v for k, v in _SCHEMA.items() if k != "ConnectionString"}
        with pytest.raises(ConfigurationError, match="Schema.ConnectionString") as exc_info:
            load_config(_write(tmp_path, {"Schema": schema}))
        assert exc_info.value.fields == ("Schema.ConnectionString",)

    def test_blank_schema_name(self, tmp_path):
        schema = dict(_SCHEMA, SchemaName="   ")
        with pytest.raises(ConfigurationError, match="Schema.SchemaName"):
            load_config(_write(tmp_path, {"Schema": schema}))

    def test_unknown_capability(self, tmp_path):
        with pytest.raises(ConfigurationError, match="QueryCapabilities"):
            load_config(_write(tmp_path, {"Schema": _SCHEMA, "QueryCapabilities": ["caching"]}))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "appsettings.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="not valid JSON"):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        with pytest.raises(ConfigurationError, match="JSON object"):
            load_config(_write(tmp_path, ["Schema"]))


class TestLoadSchemaFile:

    def test_load(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"entities": [{"name": "Customer"}]}))
        assert load_schema_file(path) == {"entities": [{"name": "Customer"}]}

    def test_missing(self, tmp_path):
        with pytest.raises(SchemaResolutionError, match="not found"):
            load_schema_file(tmp_path / "schema.json")


class TestOpenContainer:

    def test_yields_instance(self, identity):
        with open_container(identity) as container:
            assert type(container).__name__ == "ShopContext"
            assert container.connection_string == "Data Source=shop.db"
            assert not container.closed

    def test_closed_and_unloaded_after_use(self, identity):
        with open_container(identity) as container:
            assert "Shop.Models" in sys.modules
        assert container.closed
        assert "Shop.Models" not in sys.modules

    def test_closed_on_error(self, identity):
        with pytest.raises(RuntimeError):
            with open_container(identity) as container:
                raise RuntimeError("introspection failed")
        assert container.closed
        assert "Shop.Models" not in sys.modules

    def test_missing_module(self, identity, tmp_path):
        identity = identity.model_copy(update={"module_location": str(tmp_path / "nope.py")})
        with pytest.raises(SchemaResolutionError) as exc_info:
            with open_container(identity):
                pass
        assert exc_info.value.fields == ("Schema.ModuleLocation",)

    def test_module_import_error(self, tmp_path):
        path = tmp_path / "broken.py"
        path.write_text("raise ImportError('no driver')\n")
        identity = SchemaIdentity(
            schema_name="ShopContext",
            connection_string="Data Source=shop.db",
            module_location=str(path),
            container_namespace="Broken.Models",
        )
        with pytest.raises(SchemaResolutionError, match="no driver"):
            with open_container(identity):
                pass
        assert "Broken.Models" not in sys.modules

    def test_missing_class(self, identity):
        identity = identity.model_copy(update={"schema_name": "WarehouseContext"})
        with pytest.raises(SchemaResolutionError, match="WarehouseContext"):
            with open_container(identity):
                pass
        assert "Shop.Models" not in sys.modules

    def test_rejected_connection_string(self, identity):
        identity = identity.model_copy(update={"connection_string": "Server=db"})
        with pytest.raises(SchemaResolutionError) as exc_info:
            with open_container(identity):
                pass
        assert exc_info.value.fields == ("Schema.ConnectionString",)

    def test_resolution_error_is_configuration_error(self):
        assert issubclass(SchemaResolutionError, ConfigurationError)

    def test_loaded_module_name_rejected(self, identity):
        json_module = sys.modules["json"]
        identity = identity.model_copy(update={"container_namespace": "json"})
        with pytest.raises(SchemaResolutionError) as exc_info:
            with open_container(identity):
                pass
        assert exc_info.value.fields == ("Schema.ContainerNamespace",)
        assert sys.modules["json"] is json_module
