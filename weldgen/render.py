"""Template helper functions over a model in JSON-AST form.

Each helper takes the values a template passes to it and returns either a
JSON-compatible value or a string to be written into the output.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from typing import Any

from . import strings
from .errors import CodegenError, ModelError
from .model import PRELUDE_NAMESPACE, ShapeId

DOCUMENTATION_TRAIT = "smithy.api#documentation"
TRAIT_TRAIT = "smithy.api#trait"

SIMPLE_SHAPES = (
    "string",
    "integer",
    "long",
    "blob",
    "boolean",
    "byte",
    "double",
    "float",
    "short",
    "bigDecimal",
    "bigInteger",
    "timestamp",
    "document",
)

BASIC_TYPES = (
    "string",
    "integer",
    "long",
    "blob",
    "boolean",
    "byte",
    "double",
    "float",
    "short",
    "list",
    "map",
    "union",
    "bigDecimal",
    "bigInteger",
    "timestamp",
    "document",
)

_PLACEHOLDER_SHAPE = "Placeholder"


class RenderError(CodegenError):
    """A template helper received an argument it cannot use."""


def _expect_str(value: Any, tag: str) -> str:
    if not isinstance(value, str):
        raise RenderError(f"{tag} expects string param, not {value!r}")
    return value


def _expect_obj(value: Any, tag: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise RenderError(f"{tag} expects object param, not {value!r}")
    return value


def _expect_array(value: Any, tag: str) -> list:
    if not isinstance(value, (list, tuple)):
        raise RenderError(f"{tag} expects array param, not {value!r}")
    return list(value)


def _parse_shape_id(text: Any, tag: str) -> ShapeId:
    text = _expect_str(text, tag)
    try:
        return ShapeId.parse(text)
    except ModelError as e:
        raise RenderError(f"invalid shape id {e} for {tag}") from e


def _natural_key(text: str) -> list[tuple]:
    """Case-insensitive key over alphanumeric characters, digit runs as numbers."""
    chars = [c.lower() for c in text if c.isalnum()]
    key: list[tuple] = []
    digits: list[str] = []
    for c in chars:
        if c.isdigit():
            digits.append(c)
            continue
        if digits:
            run = "".join(digits)
            key.append((0, int(run), len(run)))
            digits = []
        key.append((1, c))
    if digits:
        run = "".join(digits)
        key.append((0, int(run), len(run)))
    return key


def natural_compare(a: str, b: str) -> int:
    """Compare strings naturally: case-insensitive, only letters and digits,
    digit runs compared by value. Ties fall back to plain comparison."""
    ka, kb = _natural_key(a), _natural_key(b)
    if ka != kb:
        return -1 if ka < kb else 1
    if a != b:
        return -1 if a < b else 1
    return 0


def to_sorted_array(items: Iterable[tuple[str, Any]]) -> list[dict]:
    """Sort (key, shape) pairs naturally by key, adding the key as ``_key`` to each shape."""
    pairs = sorted(items, key=functools.cmp_to_key(lambda x, y: natural_compare(x[0], y[0])))
    result = []
    for key, value in pairs:
        if not isinstance(value, Mapping):
            raise RenderError(f"shape '{key}' is not an object: {value!r}")
        shape = dict(value)
        shape["_key"] = key
        result.append(shape)
    return result


def _is_trait_value(shape: Any) -> bool:
    if not isinstance(shape, Mapping):
        return False
    shape_traits = shape.get("traits")
    return isinstance(shape_traits, Mapping) and TRAIT_TRAIT in shape_traits


def filter_shapes(shape_kind: str, shapes: Any) -> list:
    """Select shapes of a kind: a shape type, or "simple", "types" or "trait"."""
    shape_kind = _expect_str(shape_kind, "filter_shapes")
    shapes = _expect_array(shapes, "filter_shapes")

    def keep(shape: Any) -> bool:
        if not isinstance(shape, Mapping):
            return False
        kind = shape.get("type")
        if not isinstance(kind, str):
            return False
        trait = _is_trait_value(shape)
        if shape_kind == "trait":
            return trait
        if trait:
            return False
        return (
            (shape_kind == "simple" and kind in SIMPLE_SHAPES)
            or (shape_kind == "types" and kind in BASIC_TYPES)
            or shape_kind == kind
        )

    return [shape for shape in shapes if keep(shape)]


def filter_namespace(namespace: str, shapes: Any) -> list[dict]:
    """Shapes in the namespace, sorted naturally, each with its id as ``_key``."""
    namespace = _expect_str(namespace, "filter_namespace")
    try:
        ShapeId.parse(f"{namespace}#{_PLACEHOLDER_SHAPE}")
    except ModelError as e:
        raise RenderError(f"invalid namespace {namespace}") from e
    shapes = _expect_obj(shapes, "filter_namespace")
    selected = []
    for key, value in shapes.items():
        try:
            shape_id = ShapeId.parse(key)
        except ModelError:
            continue
        if shape_id.namespace == namespace:
            selected.append((str(shape_id), value))
    return to_sorted_array(selected)


def is_simple(type_name: str) -> bool:
    """True if the type name is one of the simple shapes."""
    return _expect_str(type_name, "is_simple") in SIMPLE_SHAPES


def doc(shape: Any) -> str:
    """Documentation text of a shape, or an empty string."""
    shape = _expect_obj(shape, "doc")
    shape_traits = shape.get("traits")
    if isinstance(shape_traits, Mapping):
        text = shape_traits.get(DOCUMENTATION_TRAIT)
        if isinstance(text, str):
            return text
    return ""


def traits(shape: Any) -> dict:
    """Copy of a shape's traits without the documentation and trait traits."""
    shape = _expect_obj(shape, "traits")
    shape_traits = shape.get("traits")
    if not isinstance(shape_traits, Mapping):
        return {}
    return {
        k: v for k, v in shape_traits.items() if k not in (DOCUMENTATION_TRAIT, TRAIT_TRAIT)
    }


def is_trait(shape: Any) -> bool:
    """True if the shape is a trait definition."""
    return _is_trait_value(_expect_obj(shape, "is_trait"))


def namespace_name(shape_id: str) -> str:
    """Namespace part of a shape id."""
    return _parse_shape_id(shape_id, "namespace_name").namespace


def typ(type_id: str, namespace: str | None = None) -> str:
    """Type name for documentation: bare for prelude types, otherwise an html link."""
    sid = _parse_shape_id(type_id, "typ")
    if sid.namespace == PRELUDE_NAMESPACE:
        return sid.shape_name
    if isinstance(namespace, str) and sid.namespace == namespace:
        return f'<a href="#{strings.to_snake_case(sid.shape_name)}">{sid.shape_name}</a>'
    return (
        f'<a href="./{strings.to_snake_case(sid.namespace)}.html'
        f'#{strings.to_snake_case(sid.shape_name)}">{sid}</a>'
    )


def shape_name(shape_id: str) -> str:
    """Shape-name part of a shape id."""
    return _parse_shape_id(shape_id, "shape_name").shape_name


def member_name(member_id: str) -> str:
    """Validate a member identifier and return it."""
    member_id = _expect_str(member_id, "member_name")
    try:
        parsed = ShapeId.parse(f"ns#{member_id}")
    except ModelError as e:
        raise RenderError(f"invalid member id {member_id} for member_name") from e
    if parsed.member_name is not None:
        raise RenderError(f"invalid member id {member_id} for member_name")
    return parsed.shape_name