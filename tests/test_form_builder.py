import email
import io

import pytest

from oaiclient.form_builder import FormBuilder


class _WriterFailure(OSError):
    pass


class _FailingWriter:
    def write(self, data):
        raise _WriterFailure("mock writer failed")


def _parse(builder, body):
    raw = b"Content-Type: " + builder.content_type().encode() + b"\r\n\r\n" + body.getvalue()
    return email.message_from_bytes(raw).get_payload()


def test_failing_writer(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"content")
    builder = FormBuilder(_FailingWriter())
    with path.open("rb") as handle:
        with pytest.raises(_WriterFailure):
            builder.add_file("file", handle)


def test_closed_file(tmp_path):
    path = tmp_path / "upload.bin"
    path.write_bytes(b"content")
    handle = path.open("rb")
    handle.close()
    builder = FormBuilder(io.BytesIO())
    with pytest.raises(ValueError, match="closed file"):
        builder.add_file("file", handle)


def test_exact_bytes_for_field():
    body = io.BytesIO()
    builder = FormBuilder(body, boundary="b")
    builder.write_field("a", "1")
    builder.close()
    assert body.getvalue() == b'--b\r\nContent-Disposition: form-data; name="a"\r\n\r\n1\r\n--b--\r\n'


def test_exact_bytes_for_reader():
    body = io.BytesIO()
    builder = FormBuilder(body, boundary="xyz")
    builder.add_file_reader("file", io.BytesIO(b"data"), "dir/a.txt")
    builder.close()
    assert body.getvalue() == (
        b'--xyz\r\nContent-Disposition: form-data; name="file"; filename="a.txt"\r\n'
        b"Content-Type: application/octet-stream\r\n\r\ndata\r\n--xyz--\r\n"
    )


def test_round_trip_through_parser(tmp_path):
    path = tmp_path / "image.png"
    path.write_bytes(b"\x89PNG binary")
    body = io.BytesIO()
    builder = FormBuilder(body)
    with path.open("rb") as handle:
        builder.add_file("image", handle)
    builder.write_field("prompt", "a turtle")
    builder.write_field("n", "3")
    builder.close()

    parts = _parse(builder, body)
    assert len(parts) == 3
    assert parts[0].get_param("name", header="content-disposition") == "image"
    assert parts[0].get_filename() == str(path)
    assert parts[0].get_payload(decode=True) == b"\x89PNG binary"
    assert parts[1].get_param("name", header="content-disposition") == "prompt"
    assert parts[1].get_payload(decode=True) == b"a turtle"
    assert parts[2].get_payload(decode=True) == b"3"


def test_empty_file_name_rejected():
    class _Nameless(io.BytesIO):
        name = ""

    builder = FormBuilder(io.BytesIO())
    with pytest.raises(ValueError, match="filename cannot be empty"):
        builder.add_file("file", _Nameless(b"x"))


def test_reader_with_empty_filename_uses_dot():
    body = io.BytesIO()
    builder = FormBuilder(body, boundary="q")
    builder.add_file_reader("file", io.BytesIO(b"x"), "")
    assert b'filename="."' in body.getvalue()


def test_quotes_escaped_in_names():
    body = io.BytesIO()
    builder = FormBuilder(body, boundary="q")
    builder.write_field('a"b', "v")
    assert b'name="a\\"b"' in body.getvalue()


def test_content_type_quotes_special_boundary():
    assert FormBuilder(io.BytesIO(), boundary="xyz").content_type() == "multipart/form-data; boundary=xyz"
    assert FormBuilder(io.BytesIO(), boundary="a b").content_type() == 'multipart/form-data; boundary="a b"'


def test_random_boundary_is_unique():
    first = FormBuilder(io.BytesIO())
    second = FormBuilder(io.BytesIO())
    assert first.boundary != second.boundary
    assert len(first.boundary) == 60


@pytest.mark.parametrize("boundary", ["", "x" * 71, "ends ", "bad{char"])
def test_invalid_boundary(boundary):
    with pytest.raises(ValueError):
        FormBuilder(io.BytesIO(), boundary=boundary)