"""Helpers over a model held in JSON-AST form.

A model is a mapping with a ``"shapes"`` entry that maps absolute shape ids
(``namespace#Name``) to shape objects carrying ``"type"``, and optionally
``"traits"``, ``"members"`` and ``"target"``.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import ModelError

WASMCLOUD_MODEL_NAMESPACE = "org.wasmcloud.model"
WASMCLOUD_CORE_NAMESPACE = "org.wasmcloud.core"
PRELUDE_NAMESPACE = "smithy.api"

_IDENTIFIER = re.compile(r"(?:_+[A-Za-z0-9_]|[A-Za-z])[A-Za-z0-9_]*\Z")


def _is_identifier(text: str) -> bool:
    return bool(_IDENTIFIER.match(text))


def _is_namespace(text: str) -> bool:
    return bool(text) and all(_is_identifier(part) for part in text.split("."))


@dataclass(frozen=True, order=True)
class ShapeId:
    """An absolute shape id: ``namespace#Name`` or ``namespace#Name$member``."""

    namespace: str
    shape_name: str
    member_name: str | None = None

    @classmethod
    def parse(cls, text: str) -> ShapeId:
        """Parse an absolute shape id; raises ModelError if it is malformed."""
        if isinstance(text, ShapeId):
            return text
        namespace, hash_sign, rest = str(text).partition("#")
        if not hash_sign:
            raise ModelError(f"invalid shape id '{text}': missing namespace")
        shape_name, dollar, member_name = rest.partition("$")
        if not _is_namespace(namespace):
            raise ModelError(f"invalid shape id '{text}': bad namespace")
        if not _is_identifier(shape_name):
            raise ModelError(f"invalid shape id '{text}': bad shape name")
        if dollar and not _is_identifier(member_name):
            raise ModelError(f"invalid shape id '{text}': bad member name")
        return cls(namespace, shape_name, member_name if dollar else None)

    def __str__(self) -> str:
        base = f"{self.namespace}#{self.shape_name}"
        return base if self.member_name is None else f"{base}${self.member_name}"


SERIALIZATION_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "serialization")
CODEGEN_RUST_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "codegenRust")
WASMBUS_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "wasmbus")
WASMBUS_DATA_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "wasmbusData")
FIELD_NUM_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "n")
RENAME_TRAIT = ShapeId(WASMCLOUD_MODEL_NAMESPACE, "rename")

_DEFAULTABLE_PRELUDE = frozenset(
    {
        "List", "Set", "Map",
        "Blob", "Boolean", "String", "Byte", "Short",
        "Integer", "Long", "Float", "Double", "Timestamp",
    }
)


class CommentKind(enum.Enum):
    """Where a comment is written."""

    INNER = "inner"
    DOCUMENTATION = "documentation"
    IN_QUOTE = "in_quote"


def _shapes(model: Mapping) -> Mapping:
    shapes = model.get("shapes", {})
    if not isinstance(shapes, Mapping):
        raise ModelError("model 'shapes' must be an object")
    return shapes


def is_opt_namespace(shape_id: ShapeId | str, namespace: str | None) -> bool:
    """True if the namespace matches, or if there is no namespace constraint."""
    if namespace is None:
        return True
    return ShapeId.parse(shape_id).namespace == str(namespace)


def get_operation(
    model: Mapping, operation_id: ShapeId | str, service_id: str
) -> tuple[Mapping, Mapping]:
    """Find an operation shape; returns ``(shape, traits)`` or raises ModelError."""
    key = str(operation_id)
    shape = _shapes(model).get(key)
    if isinstance(shape, Mapping) and shape.get("type") == "operation":
        return shape, shape.get("traits") or {}
    raise ModelError(f"missing operation {key} for service {service_id}")


def get_trait(traits: Mapping | None, trait_id: ShapeId | str) -> Any:
    """Value of a trait, or None if the trait is absent or has no value."""
    if not traits:
        return None
    return traits.get(str(trait_id))


def resolve(model: Mapping, shape_id: ShapeId | str) -> ShapeId:
    """Resolve a shape reference to the id of the shape it names."""
    parsed = ShapeId.parse(shape_id)
    shape = _shapes(model).get(str(parsed))
    if isinstance(shape, Mapping) and isinstance(shape.get("id"), str):
        return ShapeId.parse(shape["id"])
    return parsed


def has_default(model: Mapping, member: Mapping) -> bool:
    """True if the member's target has a natural zero or empty default.

    Only prelude simple types and list, set and map qualify; user-defined
    structures never do.
    """
    target = member.get("target")
    if not isinstance(target, (str, ShapeId)):
        raise ModelError(f"member has no target: {member!r}")
    shape_id = resolve(model, target)
    return shape_id.namespace == PRELUDE_NAMESPACE and shape_id.shape_name in _DEFAULTABLE_PRELUDE


@dataclass(frozen=True)
class NumberedMember:
    """A structure member together with its optional ``@n`` field number."""

    member_id: str
    shape: Mapping = field(compare=False)
    field_num: int | None = None

    @classmethod
    def from_member(cls, member_id: str, member: Mapping) -> NumberedMember:
        """Build from a member shape, validating the field number trait."""
        value = get_trait(member.get("traits"), FIELD_NUM_TRAIT)
        if value is not None and (
            isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFF
        ):
            raise ModelError(
                f"invalid field number @n() for field '{member_id}': "
                f"expected an unsigned 16-bit integer, not {value!r}"
            )
        return cls(member_id=member_id, shape=member, field_num=value)

    @property
    def target(self) -> str | None:
        return self.shape.get("target")

    @property
    def traits(self) -> Mapping:
        return self.shape.get("traits") or {}


def has_field_numbers(fields: Iterable[NumberedMember], name: str) -> bool:
    """True if every field has a unique number, False if none is numbered.

    Raises ModelError if numbering is incomplete or has duplicates.
    """
    fields = list(fields)
    numbered = {f.field_num for f in fields if f.field_num is not None}
    if not numbered:
        return False
    if len(numbered) == len(fields):
        return True
    raise ModelError(
        f"structure {name} has incomplete or invalid field numbers: either some fields are "
        "missing the '@n()' trait, or some fields have duplicate numbers."
    )


def get_sorted_fields(
    name: str, members: Mapping[str, Mapping]
) -> tuple[list[NumberedMember], bool]:
    """Members sorted by field number if numbered, otherwise by name."""
    fields = [NumberedMember.from_member(k, v) for k, v in members.items()]
    numbered = has_field_numbers(fields, name)
    if numbered:
        fields.sort(key=lambda f: f.field_num)
    else:
        fields.sort(key=lambda f: f.member_id)
    return fields, numbered


@dataclass(frozen=True)
class PackageName:
    """Mapping of a namespace to a package in target languages."""

    namespace: str
    crate_name: str | None = None
    py_module: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> PackageName:
        if not isinstance(data, Mapping):
            raise ModelError(f"PackageName: expected an object, not {type(data).__name__}")
        namespace = data.get("namespace")
        if not isinstance(namespace, str):
            raise ModelError("PackageName: missing or invalid 'namespace'")
        crate = data.get("crate")
        py_module = data.get("py_module")
        for key, value in (("crate", crate), ("py_module", py_module)):
            if value is not None and not isinstance(value, str):
                raise ModelError(f"PackageName.{key}: expected a string, not {value!r}")
        return cls(namespace=namespace, crate_name=crate, py_module=py_module)