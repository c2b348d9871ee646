"""Trait value types of the core interface model."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ModelError

SMITHY_VERSION = "1.0"


def _as_mapping(data: Any, owner: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ModelError(f"{owner}: expected an object, not {type(data).__name__}")
    return data


def _bool(data: Mapping, key: str, owner: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ModelError(f"{owner}.{key}: expected a boolean, not {value!r}")
    return value


def _str(data: Mapping, key: str, owner: str) -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ModelError(f"{owner}.{key}: expected a string, not {value!r}")
    return value


def _opt_str(data: Mapping, key: str, owner: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ModelError(f"{owner}.{key}: expected a string, not {value!r}")
    return value


@dataclass(frozen=True)
class CodegenRust:
    """Rust codegen traits."""

    no_derive_default: bool = False
    no_derive_eq: bool = False

    @classmethod
    def from_json(cls, data: Any) -> CodegenRust:
        data = _as_mapping(data, "CodegenRust")
        return cls(
            no_derive_default=_bool(data, "noDeriveDefault", "CodegenRust"),
            no_derive_eq=_bool(data, "noDeriveEq", "CodegenRust"),
        )

    def to_json(self) -> dict:
        return {"noDeriveDefault": self.no_derive_default, "noDeriveEq": self.no_derive_eq}


@dataclass(frozen=True)
class Extends:
    """Indicates that a trait or class extends one or more bases."""

    base: tuple[str, ...] | None = None

    @classmethod
    def from_json(cls, data: Any) -> Extends:
        data = _as_mapping(data, "Extends")
        base = data.get("base")
        if base is None:
            return cls()
        if not isinstance(base, list) or not all(isinstance(b, str) for b in base):
            raise ModelError(f"Extends.base: expected a list of strings, not {base!r}")
        return cls(base=tuple(base))

    def to_json(self) -> dict:
        return {} if self.base is None else {"base": list(self.base)}


@dataclass(frozen=True)
class RenameItem:
    """Name of an item in one target language."""

    lang: str = ""
    name: str = ""

    @classmethod
    def from_json(cls, data: Any) -> RenameItem:
        data = _as_mapping(data, "RenameItem")
        return cls(lang=_str(data, "lang", "RenameItem"), name=_str(data, "name", "RenameItem"))

    def to_json(self) -> dict:
        return {"lang": self.lang, "name": self.name}


@dataclass(frozen=True)
class Serialization:
    """Overrides for serializer and deserializer."""

    name: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> Serialization:
        data = _as_mapping(data, "Serialization")
        return cls(name=_opt_str(data, "name", "Serialization"))

    def to_json(self) -> dict:
        return {} if self.name is None else {"name": self.name}


@dataclass(frozen=True)
class Wasmbus:
    """Protocol settings of a service."""

    actor_receive: bool = False
    contract_id: str | None = None
    provider_receive: bool = False

    @classmethod
    def from_json(cls, data: Any) -> Wasmbus:
        data = _as_mapping(data, "Wasmbus")
        return cls(
            actor_receive=_bool(data, "actorReceive", "Wasmbus"),
            contract_id=_opt_str(data, "contractId", "Wasmbus"),
            provider_receive=_bool(data, "providerReceive", "Wasmbus"),
        )

    def to_json(self) -> dict:
        out: dict = {"actorReceive": self.actor_receive}
        if self.contract_id is not None:
            out["contractId"] = self.contract_id
        out["providerReceive"] = self.provider_receive
        return out