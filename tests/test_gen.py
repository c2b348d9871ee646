from pathlib import Path

import pytest

from weldgen import strings
from weldgen.errors import FormatterError, OtherError
from weldgen.gen import (
    CodeGen,
    SourceFormatter,
    ensure_files_exist,
    find_files,
    spaces,
    templates_from_dir,
    to_json,
)
from weldgen.model import CommentKind
from weldgen.writer import Writer

RENAME = "org.wasmcloud.model#rename"


class PythonGen(CodeGen):
    language = "python"


class RecordingFormatter(SourceFormatter):
    def __init__(self):
        self.calls = []

    def run(self, source_files):
        self.calls.append(list(source_files))

    def include(self, path):
        return str(path).endswith(".rs")


class FormattingGen(CodeGen):
    def __init__(self):
        self.formatter = RecordingFormatter()

    def source_formatter(self):
        return self.formatter


class StagedGen(CodeGen):
    def init_file(self, w, model, file_path, params):
        w.write(f"[{file_path}]")

    def write_source_file_header(self, w, model, params):
        w.write("H")

    def declare_types(self, w, model, params):
        w.write(params["types"])

    def write_services(self, w, model, params):
        w.write(b"S")


def test_write_comment():
    w = Writer()
    CodeGen().write_comment(w, CommentKind.INNER, "hello")
    assert w.take() == b"// hello\n"


def test_write_documentation_trims_line_ends():
    w = Writer()
    CodeGen().write_documentation(w, "Id", "first  \t\r\nsecond")
    assert w.take() == b"// first\n// second\n"


def test_generate_file_calls_hooks_in_order():
    out = CodeGen.generate_file(StagedGen(), {}, "a.rs", {"types": "T"})
    assert out == b"[a.rs]HTS"


def test_default_generate_file_is_empty():
    assert CodeGen().generate_file({}, "x", {}) == b""


def test_rename_trait_matches_language():
    traits = {RENAME: [{"lang": "rust", "name": "r"}, {"lang": "python", "name": "delete_"}]}
    gen = PythonGen()
    assert CodeGen.has_rename_trait(gen, traits) == "delete_"
    assert CodeGen.to_method_name(gen, "Delete", traits) == "delete_"
    assert CodeGen.to_field_name(gen, "Delete", traits) == "delete_"


def test_rename_trait_other_language_ignored():
    traits = {RENAME: [{"lang": "rust", "name": "r"}]}
    assert PythonGen().has_rename_trait(traits) is None
    assert PythonGen().to_method_name("GetThing", traits) == strings.to_snake_case("GetThing")


def test_invalid_rename_trait_is_ignored():
    traits = {RENAME: [{"lang": 5}]}
    assert CodeGen.has_rename_trait(PythonGen(), traits) is None


def test_names_without_traits():
    gen = CodeGen()
    assert gen.to_field_name("someField", {}) == strings.to_snake_case("someField")
    assert gen.to_type_name("some_type") == strings.to_pascal_case("some_type")


def test_full_dispatch_name():
    gen = CodeGen()
    expected = f"{strings.to_pascal_case('my_service')}.{strings.to_pascal_case('do_it')}"
    assert gen.full_dispatch_name("my_service", "do_it") == expected
    assert gen.op_dispatch_name("do_it") == strings.to_pascal_case("do_it")


def test_format_runs_on_included_files(tmp_path):
    rs = tmp_path / "lib.rs"
    rs.write_text("fn main() {}")
    toml = tmp_path / "Cargo.toml"
    toml.write_text("")
    gen = FormattingGen()
    result = CodeGen.format(gen, [rs, toml], {})
    assert result is None
    assert gen.formatter.calls == [[str(rs)]]


def test_format_skipped_for_create_interface(tmp_path):
    gen = FormattingGen()
    CodeGen.format(gen, [tmp_path / "missing.rs"], {"create_interface": True})
    assert gen.formatter.calls == []


def test_format_missing_file_raises(tmp_path):
    gen = FormattingGen()
    with pytest.raises(FormatterError, match="missing source file"):
        CodeGen.format(gen, [tmp_path / "missing.rs"], {})
    assert gen.formatter.calls == []


def test_ensure_files_exist_lists_missing(tmp_path):
    present = tmp_path / "a.rs"
    present.write_text("")
    with pytest.raises(FormatterError) as info:
        ensure_files_exist([present, tmp_path / "b.rs", tmp_path / "c.rs"])
    assert str(tmp_path / "b.rs") in str(info.value)
    assert str(present) not in str(info.value)


def test_spaces():
    assert spaces(0) == ""
    assert spaces(3) == " " * 12
    with pytest.raises(ValueError):
        spaces(64)


def test_to_json_round_trip():
    value = {"a": [1, 2.5, "x"], "b": {"c": True, "d": None}}
    assert to_json(value) == value
    assert to_json({"t": (1, 2)}) == {"t": [1, 2]}


def test_to_json_unserializable():
    with pytest.raises(OtherError):
        to_json({"x": object()})


def test_find_files_recursive(tmp_path):
    (tmp_path / "sub").mkdir()
    a = tmp_path / "a.hbs"
    b = tmp_path / "sub" / "b.hbs"
    a.write_text("")
    b.write_text("")
    (tmp_path / "c.txt").write_text("")
    found = find_files(tmp_path, "hbs")
    assert sorted(found) == sorted([a, b])


def test_find_files_single_smithy_file(tmp_path):
    model = tmp_path / "model.smithy"
    model.write_text("")
    assert find_files(model, "smithy") == [model]


def test_find_files_invalid(tmp_path):
    other = tmp_path / "x.txt"
    other.write_text("")
    with pytest.raises(OtherError, match="is not a valid folder"):
        find_files(other, "txt")
    with pytest.raises(OtherError):
        find_files(tmp_path / "nope", "hbs")


def test_templates_from_dir(tmp_path):
    (tmp_path / "header.hbs").write_text("{{name}}")
    (tmp_path / "skip.md").write_text("no")
    assert templates_from_dir(tmp_path) == [("header", "{{name}}")]