# tests/services/test_encoding.py
import io

import pytest
from PIL import Image

from conftest import FailingScan, make_page_image
from docusafe.config import settings
from docusafe.exceptions import ImageProcessingError
from docusafe.services.capture import ImageScan
from docusafe.services.encoding import encode_page, encode_pages


def test_encode_page_produces_jpeg():
    data = encode_page(make_page_image((64, 48), "white"))

    image = Image.open(io.BytesIO(data))
    assert image.format == "JPEG"
    assert image.size == (64, 48)


def test_encode_page_converts_alpha():
    data = encode_page(make_page_image((32, 32), (255, 0, 0, 128), mode="RGBA"))
    assert Image.open(io.BytesIO(data)).mode == "RGB"


def test_lower_quality_is_smaller():
    image = Image.effect_noise((200, 200), 64).convert("RGB")
    assert len(encode_page(image, quality=20)) < len(encode_page(image, quality=90))


def test_default_quality_mapping():
    assert settings.jpeg_quality_percent == 65


def test_encode_page_failure():
    class BrokenImage:
        mode = "RGB"

        def save(self, *args, **kwargs):
            raise OSError("encoder missing")

    with pytest.raises(ImageProcessingError):
        encode_page(BrokenImage())


def test_encode_pages_aborts_batch():
    with pytest.raises(ImageProcessingError) as exc_info:
        encode_pages(FailingScan(page_count=4, fail_at=1))
    assert exc_info.value.page_index == 1


def test_encode_pages_in_order():
    scan = ImageScan([make_page_image((20 + i, 20)) for i in range(3)])

    encoded = encode_pages(scan)

    assert [Image.open(io.BytesIO(data)).size[0] for data in encoded] == [20, 21, 22]
