import pytest

from weldgen.writer import Writer


def test_write_mixed_inputs_then_take():
    w = Writer()
    w.write("// ")
    w.write(b"doc")
    w.write(bytearray(b"\n"))
    assert w.take() == b"// doc\n"


def test_take_empties_buffer():
    w = Writer()
    w.write("abc")
    first = w.take()
    assert first == b"abc"
    assert w.take() == b""
    assert len(w) == 0


def test_text_is_utf8_encoded():
    w = Writer()
    w.write("é")
    assert w.take() == "é".encode("utf-8")


def test_length_tracks_written_bytes():
    w = Writer()
    w.write(b"12345")
    w.write(memoryview(b"67"))
    assert len(w) == 7


def test_rejects_other_types():
    w = Writer()
    with pytest.raises(TypeError):
        w.write(42)


def test_writes_after_take_start_fresh():
    w = Writer()
    w.write("old")
    w.take()
    w.write("new")
    assert w.take() == b"new"