"""Tests for the prebuilt validator catalog."""

from datetime import date
from types import SimpleNamespace

import pytest

import certforms.validation.catalog as catalog_module
from certforms.config import Settings
from certforms.models import DocumentFilter, FileRef, SignaturePosition
from certforms.validation import (
    FrozenValidatorError,
    UnknownValidatorError,
    build_catalog,
    get_catalog,
    rules,
)

MB = 1024 * 1024


@pytest.fixture
def catalog():
    return build_catalog(Settings(), today=date(2024, 6, 1))


def make_file(content_type: str, size: int = MB, name: str = "file") -> FileRef:
    return FileRef(name=name, size=size, content_type=content_type)


class TestCatalog:
    """Tests for the catalog container."""

    def test_contains_all_fields(self, catalog):
        assert set(catalog) == {
            "signature_file",
            "signature_position",
            "document_title",
            "reject_reason",
            "comments",
            "signing_notes",
            "attachment_file",
            "document_filter",
            "student_id",
            "certificate_title",
            "activity_date",
            "email",
            "new_password",
        }

    def test_validators_are_frozen(self, catalog):
        for validator in catalog.values():
            assert validator.frozen
        with pytest.raises(FrozenValidatorError):
            catalog["reject_reason"].add_rule(rules.required())

    def test_copy_extends_without_touching_catalog(self, catalog):
        extended = catalog["comments"].copy().add_rule(rules.required())
        assert not extended.validate("").is_valid
        assert catalog["comments"].validate("").is_valid

    def test_unknown_name(self, catalog):
        with pytest.raises(UnknownValidatorError):
            catalog["nope"]
        assert catalog.get("nope") is None
        assert "nope" not in catalog

    def test_mapping_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog["extra"] = catalog["comments"]

    def test_reference_date(self, catalog):
        assert catalog.reference_date == date(2024, 6, 1)

    def test_get_catalog_is_cached(self):
        assert get_catalog() is get_catalog()

    def test_get_catalog_follows_the_date(self, monkeypatch):
        class FixedDate(date):
            current = date(2030, 1, 1)

            @classmethod
            def today(cls):
                return cls.current

        monkeypatch.setattr(catalog_module, "date", FixedDate)
        first = get_catalog()
        assert first.reference_date == date(2030, 1, 1)
        assert get_catalog() is first

        FixedDate.current = date(2030, 1, 2)
        assert get_catalog().reference_date == date(2030, 1, 2)
        assert catalog_module.get_catalog()["activity_date"].validate("2030-12-31").is_valid


class TestSignatureFile:
    """Tests for signature_file."""

    def test_png_is_valid(self, catalog):
        result = catalog["signature_file"].validate(make_file("image/png"))
        assert result.is_valid
        assert result.warnings == ()

    def test_jpeg_is_valid_with_png_warning(self, catalog):
        result = catalog["signature_file"].validate(make_file("image/jpeg"))
        assert result.is_valid
        assert result.warnings == ("PNG files are recommended for the sharpest signature",)

    def test_pdf_is_rejected(self, catalog):
        result = catalog["signature_file"].validate(make_file("application/pdf"))
        assert not result.is_valid
        assert "File must be an image (PNG, JPG, JPEG, SVG)" in result.errors

    def test_oversized_file_is_rejected(self, catalog):
        result = catalog["signature_file"].validate(make_file("image/png", size=6 * MB))
        assert result.errors == ("File size must not exceed 5 MB",)

    def test_missing_file_reports_every_rule(self, catalog):
        result = catalog["signature_file"].validate(None)
        assert result.errors == (
            "Please select a signature file",
            "File must be an image (PNG, JPG, JPEG, SVG)",
            "File size must not exceed 5 MB",
            "File is too small (minimum 1 KB)",
        )
        assert result.warnings == ("PNG files are recommended for the sharpest signature",)

    def test_undersized_file_is_rejected(self, catalog):
        result = catalog["signature_file"].validate(make_file("image/png", size=500))
        assert result.errors == ("File is too small (minimum 1 KB)",)

    def test_large_file_warns(self, catalog):
        result = catalog["signature_file"].validate(make_file("image/png", size=3 * MB))
        assert result.is_valid
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("File is large")

    def test_file_like_object(self, catalog):
        upload = SimpleNamespace(name="sig.png", size=2048, type="image/png")
        assert catalog["signature_file"].validate(upload).is_valid


class TestSignaturePosition:
    """Tests for signature_position."""

    def test_valid_position(self, catalog):
        result = catalog["signature_position"].validate({"x": 50, "y": 50, "width": 200, "height": 80})
        assert result.is_valid
        assert result.warnings == ()

    def test_horizontal_out_of_bounds(self, catalog):
        result = catalog["signature_position"].validate({"x": 150, "y": 50, "width": 200, "height": 80})
        assert not result.is_valid
        assert result.errors == ("Horizontal position must be between 0-100%",)

    def test_every_bound_reported(self, catalog):
        result = catalog["signature_position"].validate({"x": -1, "y": 101, "width": 30, "height": 10})
        assert len(result.errors) == 4

    def test_square_signature_warns(self, catalog):
        result = catalog["signature_position"].validate(
            SignaturePosition(x=50, y=50, width=100, height=100)
        )
        assert result.is_valid
        assert len(result.warnings) == 1

    def test_non_structure_fails_all_bounds(self, catalog):
        assert len(catalog["signature_position"].validate("top-left").errors) == 4


class TestTextFields:
    """Tests for free-text fields."""

    def test_reject_reason_valid(self, catalog):
        reason = "The document contains errors that must be corrected."
        assert catalog["reject_reason"].validate(reason).is_valid

    def test_reject_reason_empty(self, catalog):
        result = catalog["reject_reason"].validate("")
        assert result.errors == (
            "Please give a reason for rejecting",
            "Reason must be at least 10 characters long",
        )

    def test_reject_reason_bounds(self, catalog):
        assert not catalog["reject_reason"].validate("Error").is_valid
        assert not catalog["reject_reason"].validate("A" * 501).is_valid
        assert catalog["reject_reason"].validate("A" * 500).is_valid

    def test_reject_reason_markup(self, catalog):
        result = catalog["reject_reason"].validate("<b onclick=x>Wrong name</b> on page two")
        assert "Unsafe content detected" in result.errors

    def test_reject_reason_injection(self, catalog):
        result = catalog["reject_reason"].validate("Wrong name; DROP TABLE users")
        assert result.errors == ("Unsafe pattern detected",)

    def test_document_title(self, catalog):
        assert catalog["document_title"].validate("Annual Report").is_valid
        assert not catalog["document_title"].validate("Doc").is_valid

    def test_comments_optional(self, catalog):
        assert catalog["comments"].validate("").is_valid
        assert catalog["comments"].validate(None).is_valid
        assert not catalog["comments"].validate("A" * 1001).is_valid
        assert not catalog["comments"].validate(42).is_valid

    def test_unset_signing_notes(self, catalog):
        result = catalog["signing_notes"].validate(None)
        assert result.is_valid
        assert result.warnings == ()

    def test_signing_notes_warning(self, catalog):
        result = catalog["signing_notes"].validate("A" * 600)
        assert result.is_valid
        assert result.warnings == ("Notes are very long (over 500 characters)",)
        assert catalog["signing_notes"].validate("Signed with approval").warnings == ()


class TestAttachmentFile:
    """Tests for attachment_file."""

    def test_pdf(self, catalog):
        assert catalog["attachment_file"].validate(make_file("application/pdf", 2 * MB)).is_valid

    def test_wrong_type(self, catalog):
        result = catalog["attachment_file"].validate(make_file("image/gif"))
        assert result.errors == ("Allowed file types: PDF, DOC, DOCX, XLS, XLSX, JPG, PNG",)

    def test_too_large(self, catalog):
        result = catalog["attachment_file"].validate(make_file("application/pdf", 11 * MB))
        assert result.errors == ("File size must not exceed 10 MB",)


class TestDocumentFilter:
    """Tests for document_filter."""

    def test_valid_filter(self, catalog):
        result = catalog["document_filter"].validate({
            "date_from": "2023-01-01",
            "date_to": "2023-12-31",
            "priority": "high",
            "status": "pending",
        })
        assert result.is_valid

    def test_empty_filter(self, catalog):
        assert catalog["document_filter"].validate(DocumentFilter()).is_valid

    def test_reversed_dates(self, catalog):
        result = catalog["document_filter"].validate({"date_from": "2023-12-31", "date_to": "2023-01-01"})
        assert result.errors == ("Start date must be on or before the end date",)

    def test_span_over_one_year(self, catalog):
        result = catalog["document_filter"].validate(
            DocumentFilter(date_from="2022-01-01", date_to="2024-01-01")
        )
        assert not result.is_valid
        assert "Date range must not exceed 1 year (365 days)" in result.errors

    def test_invalid_priority(self, catalog):
        result = catalog["document_filter"].validate({"priority": "invalid"})
        assert result.errors == ("Invalid priority",)

    def test_invalid_status(self, catalog):
        result = catalog["document_filter"].validate({"status": "invalid"})
        assert result.errors == ("Invalid status",)

    def test_camel_case_keys(self, catalog):
        result = catalog["document_filter"].validate({"dateFrom": "2022-01-01", "dateTo": "2024-01-01"})
        assert result.errors == ("Date range must not exceed 1 year (365 days)",)

    def test_camel_case_reversed(self, catalog):
        result = catalog["document_filter"].validate({"dateFrom": "2023-12-31", "dateTo": "2023-01-01"})
        assert result.errors == ("Start date must be on or before the end date",)

    def test_not_a_filter(self, catalog):
        assert len(catalog["document_filter"].validate("recent").errors) == 4


class TestCertificateFields:
    """Tests for certificate issuing fields."""

    @pytest.mark.parametrize("value", ["12345678", "123456789012"])
    def test_valid_student_ids(self, catalog, value):
        assert catalog["student_id"].validate(value).is_valid

    @pytest.mark.parametrize("value", ["1234567", "1234567890123", "abc12345", ""])
    def test_invalid_student_ids(self, catalog, value):
        assert not catalog["student_id"].validate(value).is_valid

    def test_certificate_title(self, catalog):
        assert catalog["certificate_title"].validate("Certificate of Achievement").is_valid
        assert not catalog["certificate_title"].validate("Cert").is_valid
        assert not catalog["certificate_title"].validate("A" * 201).is_valid

    def test_activity_date(self, catalog):
        assert catalog["activity_date"].validate("2024-05-01").is_valid
        assert catalog["activity_date"].validate(date(2024, 6, 1)).is_valid
        assert not catalog["activity_date"].validate("2022-01-01").is_valid
        assert not catalog["activity_date"].validate(date(2026, 1, 1)).is_valid


class TestAccountFields:
    """Tests for account and password reset fields."""

    def test_email(self, catalog):
        assert catalog["email"].validate("signer@university.ac.th").is_valid
        assert catalog["email"].validate("").errors == (
            "Please enter an email address",
            "Invalid email address",
        )

    def test_new_password(self, catalog):
        short = catalog["new_password"].validate("Passw0rd!")
        assert short.is_valid
        assert len(short.warnings) == 1
        assert catalog["new_password"].validate("Passw0rd!Secure1").warnings == ()
        assert not catalog["new_password"].validate("password").is_valid


class TestSettingsOverrides:
    """Tests for catalogs built from custom settings."""

    def test_smaller_signature_limit(self):
        catalog = build_catalog(Settings(signature_max_bytes=1024), today=date(2024, 6, 1))
        assert not catalog["signature_file"].validate(make_file("image/png", 2048)).is_valid
        assert catalog["signature_file"].validate(make_file("image/png", 1024)).is_valid

    def test_reject_reason_limits(self):
        catalog = build_catalog(Settings(reject_reason_min_length=3), today=date(2024, 6, 1))
        assert catalog["reject_reason"].validate("Bad").is_valid
