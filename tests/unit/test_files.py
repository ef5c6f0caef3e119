"""
Unit tests for stored file rules.

These tests cover the pure parts of file storage - extension checks,
content types, key generation and URL parsing - without any object
storage involved.
"""

import pytest

from sanhak.core.files import (
    DownloadedFile,
    FileValidationError,
    InvalidExtensionError,
    InvalidURLError,
    MissingExtensionError,
    StoredObjectExtension,
    UploadRequest,
    generate_object_key,
    object_key_from_url,
    object_url,
    validate_extension,
)


# ---------------------------------------------------------------------------
# Extension Tests
# ---------------------------------------------------------------------------

class TestValidateExtension:
    """Tests for extension extraction and validation."""

    @pytest.mark.parametrize("filename", ["README", "noextension", ""])
    def test_filename_without_dot_is_missing_extension(self, filename):
        with pytest.raises(MissingExtensionError):
            validate_extension(filename)

    @pytest.mark.parametrize("filename", ["movie.mp4", "script.exe", "photo.", "archive.tar.gz"])
    def test_unknown_extension_is_rejected(self, filename):
        with pytest.raises(InvalidExtensionError):
            validate_extension(filename)

    def test_extension_match_is_case_insensitive(self):
        assert validate_extension("photo.PNG") is StoredObjectExtension.PNG
        assert validate_extension("scan.JpEg") is StoredObjectExtension.JPEG

    def test_only_last_dot_counts(self):
        """'report.png.pdf' is a pdf, 'image.pdf.exe' is not allowed."""
        assert validate_extension("report.png.pdf") is StoredObjectExtension.PDF
        with pytest.raises(InvalidExtensionError):
            validate_extension("image.pdf.exe")

    def test_validation_errors_share_a_base(self):
        """Callers can catch every rejection with one except clause."""
        with pytest.raises(FileValidationError):
            validate_extension("nodot")
        with pytest.raises(FileValidationError):
            validate_extension("file.bmp")

    def test_errors_carry_stable_codes(self):
        with pytest.raises(InvalidExtensionError) as exc_info:
            validate_extension("file.bmp")
        assert exc_info.value.code == "INVALID_FILE_EXTENSION"


class TestContentType:
    """Content type follows the extension."""

    def test_pdf_is_application_pdf(self):
        assert StoredObjectExtension.PDF.content_type == "application/pdf"

    @pytest.mark.parametrize("extension", ["jpg", "jpeg", "png", "gif"])
    def test_images_use_extension_as_subtype(self, extension):
        assert StoredObjectExtension(extension).content_type == f"image/{extension}"

    def test_allowed_set_is_exactly_five_extensions(self):
        assert {e.value for e in StoredObjectExtension} == {"jpg", "jpeg", "png", "gif", "pdf"}


# ---------------------------------------------------------------------------
# Key and URL Tests
# ---------------------------------------------------------------------------

class TestGenerateObjectKey:
    """Tests for storage key generation."""

    def test_key_is_ten_character_prefix_plus_filename(self):
        key = generate_object_key("report.pdf")

        assert key.endswith("report.pdf")
        assert len(key) == 10 + len("report.pdf")
        assert all(c in "0123456789abcdef" for c in key[:10])

    def test_keys_differ_between_calls(self):
        assert generate_object_key("a.png") != generate_object_key("a.png")

    def test_explicit_prefix(self):
        assert generate_object_key("-report.pdf", prefix="AB12cd34ef") == "AB12cd34ef-report.pdf"


class TestObjectKeyFromUrl:
    """Tests for deriving keys back from public URLs."""

    def test_strips_leading_separator(self):
        url = "https://bucket.example.com/AB12cd34ef-report.pdf"
        assert object_key_from_url(url) == "AB12cd34ef-report.pdf"

    def test_percent_decodes_path(self):
        url = "https://bucket.example.com/AB12cd34ef%EC%9D%B4%EB%A0%A5%EC%84%9C%20v2.pdf"
        assert object_key_from_url(url) == "AB12cd34ef이력서 v2.pdf"

    def test_plus_decodes_to_space(self):
        """Console-style URLs write spaces as '+'."""
        url = "https://bucket.example.com/AB12cd34efmy+file.png"
        assert object_key_from_url(url) == "AB12cd34efmy file.png"

    def test_encoded_plus_stays_plus(self):
        url = "https://bucket.example.com/abc%2Bdef.png"
        assert object_key_from_url(url) == "abc+def.png"

    def test_key_with_literal_plus_round_trips(self):
        key = "0123456789c++ notes.pdf"
        url = object_url("https://bucket.example.com", key)

        assert "%2B%2B" in url
        assert object_key_from_url(url) == key

    def test_query_string_is_ignored(self):
        url = "https://bucket.example.com/key.png?versionId=3"
        assert object_key_from_url(url) == "key.png"

    def test_round_trips_with_object_url(self):
        key = "0123456789my photo #1.png"
        url = object_url("https://bucket.s3.ap-northeast-2.amazonaws.com/", key)

        assert url.startswith("https://bucket.s3.ap-northeast-2.amazonaws.com/0123456789")
        assert object_key_from_url(url) == key

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "ftp://bucket.example.com/key.png",
            "https:///key.png",
            "https://bucket.example.com/",
            "https://bucket.example.com",
            "http://[::1/key.png",
        ],
    )
    def test_malformed_urls_are_rejected(self, url):
        with pytest.raises(InvalidURLError):
            object_key_from_url(url)


# ---------------------------------------------------------------------------
# Model Tests
# ---------------------------------------------------------------------------

class TestUploadRequest:

    def test_empty_content_is_empty(self):
        assert UploadRequest(filename="a.png").is_empty
        assert not UploadRequest(filename="a.png", content=b"x").is_empty

    def test_open_returns_independent_streams(self):
        request = UploadRequest(filename="a.png", content=b"abc")

        with request.open() as first:
            assert first.read() == b"abc"
        with request.open() as second:
            assert second.read() == b"abc"


class TestDownloadedFile:

    def test_rewraps_as_upload_request(self):
        downloaded = DownloadedFile(
            name="0123456789a.png",
            original_filename="0123456789a.png",
            content_type="image/png",
            content=b"\x89PNG",
        )

        request = downloaded.to_upload_request()

        assert request.filename == "0123456789a.png"
        assert request.content == b"\x89PNG"
        assert downloaded.size == 4
