import pytest

from weldgen.errors import (
    CodegenError,
    FormatterError,
    InvalidModelError,
    IoError,
    MissingFileError,
    ModelError,
    OtherError,
    UnsupportedShapeError,
)


@pytest.mark.parametrize(
    "cls",
    [IoError, ModelError, InvalidModelError, FormatterError, MissingFileError, OtherError],
)
def test_errors_are_caught_as_codegen_error(cls):
    err = cls("reading directory models")
    assert isinstance(err, CodegenError)
    assert str(err) == "reading directory models"
    with pytest.raises(CodegenError) as info:
        raise err
    assert info.value is err


def test_message_is_kept():
    err = IoError("creating file out.rs: denied")
    assert str(err) == "creating file out.rs: denied"


def test_unsupported_shape_carries_details():
    err = UnsupportedShapeError("org.example#Thing", "resource")
    assert err.shape_id == "org.example#Thing"
    assert err.doc == "resource"
    assert "org.example#Thing" in str(err)
    assert "resource" in str(err)


def test_unsupported_shape_is_codegen_error():
    err = UnsupportedShapeError("a.b#C", "union")
    assert isinstance(err, CodegenError)
    assert err.shape_id == "a.b#C"
    assert err.doc == "union"


def test_distinct_kinds_are_not_interchangeable():
    err = ModelError("bad model")
    assert isinstance(err, CodegenError)
    assert not isinstance(err, IoError)
    assert str(err) == "bad model"