"""Tests for logo data-URL parsing and decoding."""

from __future__ import annotations

import base64

import pytest

from wellness_report.composer.composer import read_logo_size
from wellness_report.exceptions import LogoDecodeError
from wellness_report.models import LogoImage
from wellness_report.services.report_service import parse_logo_data_url


class TestParseLogoDataUrl:
    def test_valid_png(self, png_bytes) -> None:
        url = "data:image/png;base64," + base64.b64encode(png_bytes).decode("ascii")
        logo = parse_logo_data_url(url)
        assert logo is not None
        assert logo.mime_type == "image/png"
        assert logo.data == png_bytes
        assert logo.extension == "png"

    @pytest.mark.parametrize("value", [None, "", "not a data url", "data:text/plain;base64,aGVsbG8="])
    def test_rejected_values(self, value) -> None:
        assert parse_logo_data_url(value) is None

    def test_bad_base64(self) -> None:
        assert parse_logo_data_url("data:image/png;base64,@@@") is None

    def test_empty_payload_after_decode(self) -> None:
        assert parse_logo_data_url("data:image/png;base64,====") is None


class TestReadLogoSize:
    def test_pixel_size(self, logo) -> None:
        assert read_logo_size(logo) == (120, 60)

    def test_garbage_raises(self) -> None:
        with pytest.raises(LogoDecodeError, match="image/png"):
            read_logo_size(LogoImage(mime_type="image/png", data=b"definitely not an image"))

    def test_truncated_png_raises(self, png_bytes) -> None:
        with pytest.raises(LogoDecodeError):
            read_logo_size(LogoImage(mime_type="image/png", data=png_bytes[:40]))
