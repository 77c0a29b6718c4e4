"""Image generation, editing and variation requests."""

from __future__ import annotations

import enum
import io
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import IO, Any, BinaryIO

from oaiclient.api_request import ApiRequest, RequestBuilder
from oaiclient.form_builder import FormBuilder

_BUILDER = RequestBuilder()


class ImageSize(str, enum.Enum):
    SIZE_256X256 = "256x256"
    SIZE_512X512 = "512x512"
    SIZE_1024X1024 = "1024x1024"
    # dall-e-3 only
    SIZE_1792X1024 = "1792x1024"
    SIZE_1024X1792 = "1024x1792"


class ImageResponseFormat(str, enum.Enum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageModel(str, enum.Enum):
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class ImageQuality(str, enum.Enum):
    HD = "hd"
    STANDARD = "standard"


class ImageStyle(str, enum.Enum):
    VIVID = "vivid"
    NATURAL = "natural"


def _text(value: Any) -> str:
    return value.value if isinstance(value, enum.Enum) else value


@dataclass
class ImageRequest:
    prompt: str = ""
    model: ImageModel | str = ""
    n: int = 0
    quality: ImageQuality | str = ""
    size: ImageSize | str = ""
    style: ImageStyle | str = ""
    response_format: ImageResponseFormat | str = ""
    user: str = ""

    def to_dict(self) -> dict[str, Any]:
        """The request body; empty fields are left out."""
        values = {
            "prompt": self.prompt,
            "model": _text(self.model),
            "n": self.n,
            "quality": _text(self.quality),
            "size": _text(self.size),
            "style": _text(self.style),
            "response_format": _text(self.response_format),
            "user": self.user,
        }
        return {key: value for key, value in values.items() if value}


@dataclass
class ImageEditRequest:
    image: IO | None = None
    mask: IO | None = None
    prompt: str = ""
    model: ImageModel | str = ""
    n: int = 0
    size: ImageSize | str = ""
    response_format: ImageResponseFormat | str = ""


@dataclass
class ImageVariRequest:
    image: IO | None = None
    model: ImageModel | str = ""
    n: int = 0
    size: ImageSize | str = ""
    response_format: ImageResponseFormat | str = ""


@dataclass
class ImageResponseData:
    url: str = ""
    b64_json: str = ""
    revised_prompt: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageResponseData:
        return cls(
            url=data.get("url") or "",
            b64_json=data.get("b64_json") or "",
            revised_prompt=data.get("revised_prompt") or "",
        )


@dataclass
class ImageResponse:
    created: int = 0
    data: list[ImageResponseData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageResponse:
        return cls(
            created=data.get("created") or 0,
            data=[ImageResponseData.from_dict(item) for item in data.get("data") or []],
        )


BuilderFactory = Callable[[BinaryIO], Any]


def create_image(request: ImageRequest) -> ApiRequest:
    """Request that generates images from a prompt."""
    return _BUILDER.build("POST", "/images/generations", request)


def _form_request(url: str, body: io.BytesIO, form: Any) -> ApiRequest:
    body.seek(0)
    return _BUILDER.build("POST", url, body, {"Content-Type": form.content_type()})


def create_edit_image(request: ImageEditRequest, builder: BuilderFactory = FormBuilder) -> ApiRequest:
    """Multipart request that edits an image, optionally through a mask."""
    body = io.BytesIO()
    form = builder(body)
    form.add_file("image", request.image)
    if request.mask is not None:
        form.add_file("mask", request.mask)
    form.write_field("prompt", request.prompt)
    form.write_field("n", str(request.n))
    form.write_field("size", _text(request.size))
    form.write_field("response_format", _text(request.response_format))
    form.close()
    return _form_request("/images/edits", body, form)


def create_vari_image(request: ImageVariRequest, builder: BuilderFactory = FormBuilder) -> ApiRequest:
    """Multipart request that makes variations of an image."""
    body = io.BytesIO()
    form = builder(body)
    form.add_file("image", request.image)
    form.write_field("n", str(request.n))
    form.write_field("size", _text(request.size))
    form.write_field("response_format", _text(request.response_format))
    form.close()
    return _form_request("/images/variations", body, form)