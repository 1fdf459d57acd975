import base64

import httpx
import pytest
from PIL import Image

from wair.core.errors import ImageLoadError
from wair.services.images import ImageCodec, make_inline, resize, split_inline
from tests.fixtures import image_size, make_image


def test_split_inline_handles_data_urls_and_bare_base64():
    assert split_inline("data:image/png;base64,QUJD") == ("image/png", "QUJD")
    assert split_inline("QUJD") == ("image/jpeg", "QUJD")
    assert make_inline("image/webp", "QUJD") == "data:image/webp;base64,QUJD"


def test_resize_scales_wide_images_proportionally():
    out = resize(make_image(1600, 1200), 800)
    size, fmt = image_size(out)
    assert size == (800, 600)
    assert fmt == "JPEG"
    assert out.startswith("data:image/jpeg;base64,")


def test_resize_keeps_dimensions_of_narrow_images():
    size, fmt = image_size(resize(make_image(640, 900), 800))
    assert size == (640, 900)
    assert fmt == "JPEG"


def test_resize_returns_undecodable_input_unchanged():
    junk = "data:image/png;base64," + base64.b64encode(b"not an image").decode()
    assert resize(junk, 800) == junk
    assert resize("%%%not-base64%%%", 800) == "%%%not-base64%%%"


@pytest.mark.asyncio
async def test_to_inline_passes_inline_data_through():
    img = make_image(3, 3)
    assert await ImageCodec().to_inline(img) == img


@pytest.mark.asyncio
async def test_to_inline_fetches_remote_images():
    png = base64.b64decode(make_image(5, 5).split(",", 1)[1])

    def handler(request):
        return httpx.Response(200, content=png, headers={"content-type": "image/png"})

    codec = ImageCodec(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    out = await codec.to_inline("https://cdn.example.com/shirt.png")
    assert out == "data:image/png;base64," + base64.b64encode(png).decode()


@pytest.mark.asyncio
async def test_to_inline_falls_back_to_static_files(tmp_path):
    shirt = tmp_path / "images" / "shirt.png"
    shirt.parent.mkdir()
    shirt.write_bytes(base64.b64decode(make_image(6, 4).split(",", 1)[1]))

    codec = ImageCodec(static_root=str(tmp_path))
    out = await codec.to_inline("/images/shirt.png")
    size, fmt = image_size(out)
    assert size == (6, 4)
    assert fmt == "JPEG"


@pytest.mark.asyncio
async def test_to_inline_raises_when_every_path_fails(tmp_path):
    def handler(request):
        return httpx.Response(404)

    codec = ImageCodec(httpx.AsyncClient(transport=httpx.MockTransport(handler)), static_root=str(tmp_path))
    with pytest.raises(ImageLoadError):
        await codec.to_inline("/images/missing.jpg")


def test_resize_returns_oversized_images_unchanged(monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    big = make_image(40, 40)
    assert resize(big, 800) == big


@pytest.mark.asyncio
async def test_oversized_static_image_is_a_load_error(tmp_path, monkeypatch):
    (tmp_path / "big.png").write_bytes(base64.b64decode(make_image(40, 40).split(",", 1)[1]))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    with pytest.raises(ImageLoadError):
        await ImageCodec(static_root=str(tmp_path)).to_inline("/big.png")


@pytest.mark.asyncio
async def test_static_reads_stay_inside_the_static_root(tmp_path):
    static = tmp_path / "static"
    static.mkdir()
    private = tmp_path / "private.png"
    private.write_bytes(base64.b64decode(make_image(4, 4).split(",", 1)[1]))
    codec = ImageCodec(static_root=str(static))

    with pytest.raises(ImageLoadError):
        await codec.to_inline(str(private))
    with pytest.raises(ImageLoadError):
        await codec.to_inline("../private.png")
