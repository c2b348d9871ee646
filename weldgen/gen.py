"""Code-driven generation: the CodeGen base class, source formatters and file helpers."""

from __future__ import annotations

import datetime
import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import strings
from .errors import FormatterError, IoError, ModelError, OtherError
from .model import RENAME_TRAIT, CommentKind, get_trait
from .wasmbus_model import RenameItem
from .writer import Writer

COMMON_TEMPLATES: tuple[tuple[str, str], ...] = ()

_MAX_INDENT_LEVEL = 63

# Optional per-file hooks, called in this order when a subclass defines them.
_SECTION_HOOKS = ("write_source_file_header", "declare_types", "write_services")


@dataclass
class SourceFormatter:
    """Formats generated source files.

    The default formatter leaves files untouched. ``extensions`` limits the
    files it accepts; when empty, every file is accepted.
    """

    extensions: tuple[str, ...] = ()

    def run(self, source_files: Sequence[str]) -> list[Path]:
        """Run the formatter on all files and return the files it processed."""
        return [Path(f) for f in source_files]

    def include(self, path: Path | str) -> bool:
        """True if the file should be included in the set to be formatted."""
        if not self.extensions:
            return True
        return Path(path).suffix.lstrip(".") in self.extensions


class CodeGen:
    """Base class for language-specific code generators.

    ``generate_file`` calls ``init_file`` and then, when a subclass defines
    them, ``write_source_file_header``, ``declare_types`` and
    ``write_services``, each taking ``(w, model, params)``; ``finalize``
    produces the output bytes.
    """

    language = "poly"

    def __init__(self) -> None:
        self.current_file: Path | None = None
        self.current_params: dict[str, Any] = {}

    def output_language(self) -> str:
        """Name of the output language."""
        return self.language

    def get_file_extension(self) -> str:
        """File extension of source files for this language."""
        return ""

    def generate_file(self, model: Mapping, file_path: Path | str, params: Mapping) -> bytes:
        """Generate one output file and return its contents."""
        w = Writer()
        self.init_file(w, model, file_path, params)
        for name in _SECTION_HOOKS:
            hook = getattr(self, name, None)
            if callable(hook):
                hook(w, model, params)
        return self.finalize(w)

    def init_file(self, w: Writer, model: Mapping, file_path: Path | str, params: Mapping) -> None:
        """Record the file being generated and its parameters."""
        self.current_file = Path(file_path)
        self.current_params = dict(params)

    def finalize(self, w: Writer) -> bytes:
        """Complete generation and return the output bytes."""
        return w.take()

    def write_documentation(self, w: Writer, ident: Any, text: str) -> None:
        """Write documentation text as one comment per line."""
        for line in text.split("\n"):
            self.write_comment(w, CommentKind.DOCUMENTATION, line.rstrip("\r \t"))

    def write_comment(self, w: Writer, kind: CommentKind, line: str) -> None:
        """Write a single-line comment beginning with '// '."""
        w.write("// ")
        w.write(line)
        w.write("\n")

    def write_ident(self, w: Writer, ident: Any) -> None:
        """Write an identifier as a type name."""
        w.write(self.to_type_name(str(ident)))

    def has_rename_trait(self, traits: Mapping | None) -> str | None:
        """Name given by a @rename trait for this language, if any."""
        value = get_trait(traits, RENAME_TRAIT)
        if not isinstance(value, list):
            return None
        try:
            items = [RenameItem.from_json(item) for item in value]
        except ModelError:
            return None
        lang = self.output_language()
        return next((item.name for item in items if item.lang == lang), None)

    def to_type_name(self, name: str) -> str:
        """Type name in this language's case style (PascalCase by default)."""
        return strings.to_pascal_case(name)

    def to_method_name(self, method_id: Any, method_traits: Mapping | None) -> str:
        """Method name: the renamed name, or snake_case."""
        renamed = self.has_rename_trait(method_traits)
        return renamed if renamed is not None else strings.to_snake_case(str(method_id))

    def to_field_name(self, member_id: Any, member_traits: Mapping | None) -> str:
        """Field name: the renamed name, or snake_case."""
        renamed = self.has_rename_trait(member_traits)
        return renamed if renamed is not None else strings.to_snake_case(str(member_id))

    def op_dispatch_name(self, name: Any) -> str:
        """Operation name used in dispatch."""
        return strings.to_pascal_case(str(name))

    def full_dispatch_name(self, service_id: Any, method_id: Any) -> str:
        """Operation name prefixed with its service."""
        return f"{self.to_type_name(str(service_id))}.{self.op_dispatch_name(method_id)}"

    def source_formatter(self) -> SourceFormatter:
        """Formatter for generated source files."""
        return SourceFormatter()

    def format(self, files: Iterable[Path | str], lc_params: Mapping) -> None:
        """Run the source formatter over the files written for this language.

        Skipped when the language parameters contain ``create_interface``.
        """
        if "create_interface" in lc_params:
            return
        formatter = self.source_formatter()
        sources = [Path(f) for f in files if formatter.include(Path(f))]
        if sources:
            ensure_files_exist(sources)
            formatter.run([str(p) for p in sources])


def spaces(indent_level: int) -> str:
    """Four spaces per indent level."""
    if not 0 <= indent_level <= _MAX_INDENT_LEVEL:
        raise ValueError(f"indent level {indent_level} out of range")
    return " " * (indent_level * 4)


def _json_default(value: Any) -> Any:
    to_json_method = getattr(value, "to_json", None)
    if callable(to_json_method):
        return to_json_method()
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def to_json(value: Any) -> Any:
    """Convert a value to plain JSON data (dicts, lists, strings, numbers, booleans)."""
    try:
        return json.loads(json.dumps(value, default=_json_default))
    except (TypeError, ValueError) as e:
        raise OtherError(f"converting to json: {e}") from e


def _extension(path: Path) -> str:
    return path.suffix[1:] if path.suffix else ""


def find_files(directory: Path | str, extension: str) -> list[Path]:
    """Search a folder recursively for files with the given extension."""
    directory = Path(directory)
    if directory.is_dir():
        try:
            entries = sorted(directory.iterdir())
        except OSError as e:
            raise IoError(f"reading directory {directory}: {e}") from e
        results: list[Path] = []
        for path in entries:
            if path.is_dir():
                results.extend(find_files(path, extension))
            elif _extension(path) == extension:
                results.append(path)
        return results
    if directory.is_file() and _extension(directory) == "smithy":
        return [directory]
    raise OtherError(f"'{directory}' is not a valid folder or '.{extension}' file")


def templates_from_dir(start: Path | str) -> list[tuple[str, str]]:
    """Load every ``.hbs`` template below a folder, named by its base file name."""
    templates = []
    for path in find_files(start, "hbs"):
        if not path.stem:
            continue
        try:
            template = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IoError(f"reading template {path}: {e}") from e
        templates.append((path.stem, template))
    return templates


def ensure_files_exist(source_files: Iterable[Path | str]) -> None:
    """Raise FormatterError naming any file that does not exist."""
    missing = [str(p) for p in source_files if not Path(p).is_file()]
    if missing:
        raise FormatterError(f"missing source file(s) '{','.join(missing)}'")