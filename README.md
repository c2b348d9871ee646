# weldgen

Building blocks for generating source code from a service interface model
held in JSON AST form: a mapping whose `"shapes"` entry maps absolute shape
ids (`namespace#Name`) to shape objects.

There are no runtime dependencies.

## Installation

```
pip install weldgen
```

To run the test suite:

```
pip install "weldgen[test]"
pytest
```

## Modules

- `weldgen.loader` turns model sources into a list of local paths. A source is
  either a `PathSource(path, files)` or a `UrlSource(url, files)`.
  `sources_to_paths(sources, base_dir, verbose)` joins relative paths to
  `base_dir`. It passes directories through unchanged. It hands urls to
  `urls_to_cached_files`, which works as follows:
  - It downloads missing or expired files, with up to 8 downloads in parallel.
  - Each download goes to a temporary folder first.
  - Files are then copied into `weld_cache_dir()`.
  - It raises `OtherError` if any url could not be resolved.

  Each cached file is named by `url_to_cache_path(url)` as
  `host/stem.HASH.ext`. `HASH` is `fx_hash` of the url path. A missing extension
  becomes `raw` and a missing file name becomes `index`.
  `cache_expired(path)` is true for files older than one day, or for files
  whose age is unknown. If the environment variable `SMITHY_CACHE` is set to
  `NO_EXPIRE`, cached files never expire.
- `weldgen.model` works on shapes:
  - `ShapeId.parse` parses and validates shape ids.
  - `get_trait`, `get_operation` and `resolve` look things up in the model.
  - `has_default` reports whether a member's target has a natural zero or
    empty value.
  - `NumberedMember`, `has_field_numbers` and `get_sorted_fields` handle `@n`
    field numbering. They raise `ModelError` when numbering is incomplete or
    duplicated.
  - `PackageName` maps a namespace to a crate or Python module name.
  - `CommentKind` names the kinds of comment.
- `weldgen.render` has helper functions for templates:
  - `filter_shapes` selects shapes by type, or by `"simple"`, `"types"` or
    `"trait"`.
  - `filter_namespace` returns a namespace's shapes, sorted naturally, each
    with a `_key`.
  - `is_simple`, `doc`, `traits` and `is_trait` describe shapes.
  - `namespace_name`, `shape_name` and `member_name` take shape ids and member
    names apart.
  - `typ` gives a type name: bare for prelude types, otherwise an html link.
  - `natural_compare` and `to_sorted_array` do the natural sorting.

  Bad arguments raise `RenderError`.
- `weldgen.gen` provides `CodeGen`, a base class for code generators that
  write through a `Writer`:
  - `generate_file` calls `init_file`. It then calls
    `write_source_file_header`, `declare_types` and `write_services` if a
    subclass defines them, and returns the bytes from `finalize`.
  - Naming helpers such as `to_type_name`, `to_method_name`, `to_field_name`
    and `full_dispatch_name` honour a `@rename` trait for the generator's
    language.
  - `format` runs a `SourceFormatter` over the written files. The default
    `SourceFormatter` leaves files unchanged.

  File helpers are `find_files`, `templates_from_dir` and
  `ensure_files_exist`. Other helpers are `spaces` and `to_json`.
- `weldgen.writer.Writer` is an append-only byte buffer. `write` accepts text
  or bytes, and `take` returns the contents and empties the buffer.
- `weldgen.strings` does case conversion with `to_pascal_case`,
  `to_snake_case` and `to_camel_case`.
- `weldgen.wasmbus_model` has frozen dataclasses for the model's trait values:
  `CodegenRust`, `Extends`, `RenameItem`, `Serialization` and `Wasmbus`. Each
  has `from_json`.

Every error is a subclass of `weldgen.errors.CodegenError`, such as
`IoError`, `ModelError` or `FormatterError`.

## Example

```python
from weldgen.loader import url_to_cache_path
from weldgen.render import filter_shapes
from weldgen.writer import Writer

print(url_to_cache_path("http://localhost/path/file.smithy"))
# localhost/file.1dc75e4e94bec8fd.smithy

shapes = [{"type": "string"}, {"type": "structure"}]
print(filter_shapes("simple", shapes))
# [{'type': 'string'}]

w = Writer()
w.write("// generated\n")
print(w.take())
# b'// generated\n'
```

## What it does not do

This package provides parts and not a finished generator. It has none of the
following:

- No command-line program.
- No reader for `.smithy` model files and no assembler that merges them into
  one model. Models must already be in JSON AST form.
- No configuration file format.
- No template engine. `weldgen.render` provides only the helper functions that
  templates would call.
- No ready-made generator for any particular language. `CodeGen` is a base
  class to subclass.