"""Field Schemas — FieldSpec validation, EnvSchema builder, dataclass derivation.

Invariants:
    - FieldSpec rejects non-identifier names and unsupported types (pydantic ValidationError)
    - FieldSpec accepts missing/empty annotations (binder reports them)
    - schema_from_dataclass preserves field order and raises UnsupportedFieldTypeError
    - EnvSchema.add raises UnsupportedFieldTypeError too, never a pydantic error
"""

from dataclasses import dataclass, field

import pytest
from pydantic import ValidationError

from envbind.core.domain_types import DeclaredType
from envbind.core.errors import UnsupportedFieldTypeError
from envbind.schemas.field_spec import (
    ENV_METADATA_KEY,
    EnvSchema,
    FieldSpec,
    env_field,
    schema_from_dataclass,
    zero_record,
)


# ─── FieldSpec ──────────────────────────────────────────────────

def test_field_spec_accepts_enum_string_and_python_type():
    assert FieldSpec(name="a", declared_type="integer", annotation="A").declared_type is DeclaredType.INTEGER
    assert FieldSpec(name="a", declared_type=float, annotation="A").declared_type is DeclaredType.FLOAT


@pytest.mark.parametrize("declared_type", ["boolean", bool, list])
def test_field_spec_rejects_unsupported_types(declared_type):
    with pytest.raises(ValidationError):
        FieldSpec(name="a", declared_type=declared_type, annotation="A")


@pytest.mark.parametrize("name", ["", "1abc", "has space", "dash-ed"])
def test_field_spec_rejects_bad_names(name):
    with pytest.raises(ValidationError):
        FieldSpec(name=name, declared_type="text", annotation="A")


def test_field_spec_allows_missing_annotation():
    assert FieldSpec(name="a", declared_type="text").annotation is None


def test_field_spec_is_frozen():
    spec = FieldSpec(name="a", declared_type="text", annotation="A")
    with pytest.raises(ValidationError):
        spec.name = "b"


# ─── EnvSchema ──────────────────────────────────────────────────

def test_builder_keeps_registration_order():
    schema = EnvSchema().text("b", "B").integer("a", "A").float("c", "C")
    assert [f.name for f in schema] == ["b", "a", "c"]
    assert [f.declared_type for f in schema.fields] == [
        DeclaredType.TEXT, DeclaredType.INTEGER, DeclaredType.FLOAT,
    ]
    assert len(schema) == 3


def test_builder_rejects_duplicate_names():
    with pytest.raises(ValueError):
        EnvSchema().text("a", "A").integer("a", "B")


@pytest.mark.parametrize("declared_type, type_name", [
    (bool, "bool"),
    (list, "list"),
    ("boolean", "boolean"),
])
def test_builder_rejects_unsupported_type_like_dataclass_derivation(declared_type, type_name):
    schema = EnvSchema()
    with pytest.raises(UnsupportedFieldTypeError) as exc:
        schema.add("Debug", declared_type, "DEBUG;optional")
    assert exc.value.code == "UNSUPPORTED_FIELD_TYPE"
    assert exc.value.field_name == "Debug"
    assert exc.value.env_key == "DEBUG"
    assert f"'{type_name}'" in exc.value.message
    assert len(schema) == 0


def test_builder_accepts_python_types_and_enum_values():
    schema = EnvSchema().add("a", int, "A").add("b", "float", "B").add("c", DeclaredType.TEXT, "C")
    assert [f.declared_type for f in schema] == [
        DeclaredType.INTEGER, DeclaredType.FLOAT, DeclaredType.TEXT,
    ]


def test_new_record_starts_at_zero_values():
    record = EnvSchema().text("t", "T").integer("i", "I").float("f", "F").new_record()
    assert (record.t, record.i, record.f) == ("", 0, 0.0)


# ─── dataclass derivation ───────────────────────────────────────

@dataclass
class AppEnv:
    Environment: str = env_field("ENVIRONMENT;oneof=development,test,staging,production")
    Version: float = env_field("VERSION;optional")
    Concurrency: int = env_field("CONCURRENCY;optional;min=1")


def test_env_field_stores_annotation_in_metadata():
    f = env_field("PORT;min=1", default=0, metadata={"doc": "port"})
    assert f.metadata[ENV_METADATA_KEY] == "PORT;min=1"
    assert f.metadata["doc"] == "port"
    assert f.default == 0


def test_schema_from_dataclass_preserves_order_and_types():
    specs = schema_from_dataclass(AppEnv)
    assert [(s.name, s.declared_type) for s in specs] == [
        ("Environment", DeclaredType.TEXT),
        ("Version", DeclaredType.FLOAT),
        ("Concurrency", DeclaredType.INTEGER),
    ]
    assert specs[2].annotation == "CONCURRENCY;optional;min=1"


def test_schema_from_instance_matches_class():
    instance = AppEnv("test", 1.0, 2)
    assert schema_from_dataclass(instance) == schema_from_dataclass(AppEnv)


def test_field_without_metadata_has_no_annotation():
    @dataclass
    class Partial:
        Name: str = ""

    assert schema_from_dataclass(Partial)[0].annotation is None


def test_unsupported_dataclass_field_type_raises():
    @dataclass
    class WithList:
        Hosts: list = field(default_factory=list, metadata={ENV_METADATA_KEY: "HOSTS"})

    with pytest.raises(UnsupportedFieldTypeError) as exc:
        schema_from_dataclass(WithList)
    assert exc.value.field_name == "Hosts"
    assert exc.value.env_key == "HOSTS"


def test_non_dataclass_is_rejected():
    with pytest.raises(TypeError):
        schema_from_dataclass(dict)


def test_zero_record_fills_every_field():
    record = zero_record(AppEnv)
    assert record == AppEnv(Environment="", Version=0.0, Concurrency=0)
