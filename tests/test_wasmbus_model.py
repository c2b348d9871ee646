import pytest

from weldgen.errors import ModelError
from weldgen.wasmbus_model import (
    CodegenRust,
    Extends,
    RenameItem,
    Serialization,
    Wasmbus,
)


def test_codegen_rust_reads_renamed_keys():
    value = CodegenRust.from_json({"noDeriveDefault": True})
    assert value.no_derive_default is True
    assert value.no_derive_eq is False


def test_missing_fields_take_defaults():
    assert CodegenRust.from_json({}) == CodegenRust()
    assert Wasmbus.from_json({}) == Wasmbus()
    assert RenameItem.from_json({}) == RenameItem()
    assert Serialization.from_json({}) == Serialization()
    assert Extends.from_json({}) == Extends()


def test_wasmbus_fields():
    value = Wasmbus.from_json(
        {"providerReceive": True, "contractId": "wasmcloud:httpserver"}
    )
    assert value.provider_receive is True
    assert value.actor_receive is False
    assert value.contract_id == "wasmcloud:httpserver"


@pytest.mark.parametrize(
    "obj",
    [
        CodegenRust(no_derive_default=True, no_derive_eq=True),
        Extends(base=("org.example#Base",)),
        Extends(),
        RenameItem(lang="python", name="delete"),
        Serialization(name="field"),
        Serialization(),
        Wasmbus(actor_receive=True, contract_id="wasmcloud:httpserver"),
        Wasmbus(provider_receive=True),
    ],
)
def test_round_trip(obj):
    assert type(obj).from_json(obj.to_json()) == obj


def test_optional_fields_skipped_when_none():
    assert "name" not in Serialization().to_json()
    assert "contractId" not in Wasmbus().to_json()
    assert "base" not in Extends().to_json()


def test_unknown_keys_are_ignored():
    assert RenameItem.from_json({"lang": "python", "name": "delete", "x": 1}) == RenameItem(
        lang="python", name="delete"
    )


@pytest.mark.parametrize(
    "cls, data",
    [
        (CodegenRust, {"noDeriveEq": "yes"}),
        (RenameItem, {"lang": 3}),
        (Serialization, {"name": 7}),
        (Wasmbus, {"actorReceive": None}),
        (Extends, {"base": "org.example#Base"}),
        (Extends, {"base": [1]}),
        (Wasmbus, ["not", "an", "object"]),
    ],
)
def test_invalid_values_raise(cls, data):
    with pytest.raises(ModelError):
        cls.from_json(data)