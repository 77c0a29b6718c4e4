import json
from email import policy
from email.parser import BytesParser

import pytest

from oaiclient.image import (
    ImageEditRequest,
    ImageModel,
    ImageQuality,
    ImageRequest,
    ImageResponse,
    ImageResponseFormat,
    ImageSize,
    ImageStyle,
    ImageVariRequest,
    create_edit_image,
    create_image,
    create_vari_image,
)


class _MockFailure(Exception):
    pass


class _MockBuilder:
    def __init__(self, fail_file=None, fail_field=None, fail_close=False):
        self.fail_file = fail_file
        self.fail_field = fail_field
        self.fail_close = fail_close

    def __call__(self, body):
        return self

    def add_file(self, fieldname, file):
        if self.fail_file in (fieldname, "*"):
            raise _MockFailure("mock form builder fail")

    def add_file_reader(self, fieldname, reader, filename):
        raise _MockFailure("mock form builder fail")

    def write_field(self, fieldname, value):
        if fieldname == self.fail_field:
            raise _MockFailure("mock form builder fail")

    def close(self):
        if self.fail_close:
            raise _MockFailure("mock form builder fail")

    def content_type(self):
        return ""


def _parts(request):
    raw = b"Content-Type: " + request.headers["Content-Type"].encode() + b"\r\n\r\n" + request.body.read()
    message = BytesParser(policy=policy.HTTP).parsebytes(raw)
    return [
        (
            part.get_param("name", header="content-disposition"),
            part.get_filename(),
            part.get_payload(decode=True),
        )
        for part in message.iter_parts()
    ]


def test_create_image_body():
    req = create_image(
        ImageRequest(
            prompt="Lorem ipsum",
            model=ImageModel.DALL_E_3,
            n=1,
            quality=ImageQuality.HD,
            size=ImageSize.SIZE_1024X1024,
            style=ImageStyle.VIVID,
            response_format=ImageResponseFormat.URL,
            user="user",
        )
    )
    assert (req.method, req.url) == ("POST", "/images/generations")
    assert json.loads(req.body) == {
        "prompt": "Lorem ipsum",
        "model": "dall-e-3",
        "n": 1,
        "quality": "hd",
        "size": "1024x1024",
        "style": "vivid",
        "response_format": "url",
        "user": "user",
    }


def test_empty_image_request_omits_fields():
    assert ImageRequest().to_dict() == {}


def test_image_response_from_dict():
    response = ImageResponse.from_dict(
        {"created": 1700000000, "data": [{"url": "test-url1"}, {"b64_json": "e30K"}]}
    )
    assert response.created == 1700000000
    assert [d.url for d in response.data] == ["test-url1", ""]
    assert response.data[1].b64_json == "e30K"


def test_edit_image_with_mask(tmp_path):
    image_path = tmp_path / "image.png"
    mask_path = tmp_path / "mask.png"
    image_path.write_bytes(b"image-bytes")
    mask_path.write_bytes(b"mask-bytes")
    with image_path.open("rb") as origin, mask_path.open("rb") as mask:
        req = create_edit_image(
            ImageEditRequest(
                image=origin,
                mask=mask,
                prompt="There is a turtle in the pool",
                n=3,
                size=ImageSize.SIZE_1024X1024,
                response_format=ImageResponseFormat.URL,
            )
        )
    assert (req.method, req.url) == ("POST", "/images/edits")
    assert req.headers["Content-Type"].startswith("multipart/form-data; boundary=")
    assert _parts(req) == [
        ("image", str(image_path), b"image-bytes"),
        ("mask", str(mask_path), b"mask-bytes"),
        ("prompt", None, b"There is a turtle in the pool"),
        ("n", None, b"3"),
        ("size", None, b"1024x1024"),
        ("response_format", None, b"url"),
    ]


def test_edit_image_without_mask(tmp_path):
    image_path = tmp_path / "image.png"
    image_path.write_bytes(b"hello")
    with image_path.open("rb") as origin:
        req = create_edit_image(ImageEditRequest(image=origin, prompt="p", n=3, size="1024x1024", response_format="url"))
    names = [name for name, _, _ in _parts(req)]
    assert names == ["image", "prompt", "n", "size", "response_format"]


def test_vari_image(tmp_path):
    image_path = tmp_path / "image.png"
    image_path.write_bytes(b"hello")
    with image_path.open("rb") as origin:
        req = create_vari_image(
            ImageVariRequest(image=origin, n=3, size=ImageSize.SIZE_1024X1024, response_format=ImageResponseFormat.URL)
        )
    assert req.url == "/images/variations"
    assert _parts(req) == [
        ("image", str(image_path), b"hello"),
        ("n", None, b"3"),
        ("size", None, b"1024x1024"),
        ("response_format", None, b"url"),
    ]


@pytest.mark.parametrize(
    "builder",
    [
        _MockBuilder(fail_file="*"),
        _MockBuilder(fail_file="mask"),
        _MockBuilder(fail_field="prompt"),
        _MockBuilder(fail_field="n"),
        _MockBuilder(fail_field="size"),
        _MockBuilder(fail_field="response_format"),
        _MockBuilder(fail_close=True),
    ],
)
def test_edit_image_builder_failures(builder):
    with pytest.raises(_MockFailure):
        create_edit_image(ImageEditRequest(mask=object()), builder)


@pytest.mark.parametrize(
    "builder",
    [
        _MockBuilder(fail_file="*"),
        _MockBuilder(fail_field="n"),
        _MockBuilder(fail_field="size"),
        _MockBuilder(fail_field="response_format"),
        _MockBuilder(fail_close=True),
    ],
)
def test_vari_image_builder_failures(builder):
    with pytest.raises(_MockFailure):
        create_vari_image(ImageVariRequest(), builder)


def test_edit_image_with_succeeding_mock_builder():
    req = create_edit_image(ImageEditRequest(mask=object()), _MockBuilder())
    assert req.headers == {"Content-Type": ""}
    assert req.body.read() == b""