"""Unit tests for form field helpers, slugs and validation."""

import pytest

from careerconnect.core.form_helpers import FormFieldSpec, filter_form_fields, slugify, sort_form_fields
from careerconnect.core.validation import (
    validate_email,
    validate_form_data,
    validate_form_field,
    validate_phone_number,
    validate_url,
)


def _field(name: str, order: int = 0, required: bool = False, visibility: str = None) -> FormFieldSpec:
    return FormFieldSpec(
        id=name, name=name, label=name.title(), order=order, required=required, visibility=visibility
    )


class TestFormFields:
    def test_sort_is_stable(self):
        fields = [_field("b", 2), _field("a", 1), _field("c", 1)]
        assert [f.name for f in sort_form_fields(fields)] == ["a", "c", "b"]

    def test_sort_returns_new_list(self):
        fields = [_field("b", 2), _field("a", 1)]
        sort_form_fields(fields)
        assert [f.name for f in fields] == ["b", "a"]

    def test_filter_by_visibility(self):
        fields = [_field("a", visibility="public"), _field("b", visibility="internal"), _field("c")]
        assert [f.name for f in filter_form_fields(fields, "public")] == ["a"]


class TestSlugify:
    @pytest.mark.parametrize(
        "title,expected",
        [
            ("  Senior Backend Engineer (Python)! ", "senior-backend-engineer-python"),
            ("Data_Analyst -- Jakarta", "data-analyst-jakarta"),
            ("---", ""),
        ],
    )
    def test_slugify(self, title, expected):
        assert slugify(title) == expected


class TestValidators:
    @pytest.mark.parametrize(
        "email,valid", [("a@b.co", True), ("user.name@example.com", True), ("a@b", False), ("no at", False), ("", False)]
    )
    def test_email(self, email, valid):
        assert validate_email(email) is valid

    @pytest.mark.parametrize(
        "phone,valid", [("+62 812 3456 7890", True), ("(021) 555-1234", True), ("12345", False), ("abcdefghijk", False)]
    )
    def test_phone(self, phone, valid):
        assert validate_phone_number(phone) is valid

    @pytest.mark.parametrize(
        "url,valid", [("https://example.com", True), ("http://a.b/c?d=1", True), ("example.com", False), ("", False)]
    )
    def test_url(self, url, valid):
        assert validate_url(url) is valid

    def test_required_field_missing(self):
        assert validate_form_field("", "text", True) == (False, "This field is required")

    def test_optional_empty_field_is_valid(self):
        assert validate_form_field(None, "email", False) == (True, None)

    @pytest.mark.parametrize(
        "value,field_type,error",
        [
            ("bad", "email", "Invalid email address"),
            ("123", "phone", "Invalid phone number"),
            ("nope", "url", "Invalid URL"),
        ],
    )
    def test_typed_errors(self, value, field_type, error):
        assert validate_form_field(value, field_type, False) == (False, error)

    def test_form_data_reports_missing_required_fields(self):
        fields = [_field("full_name", required=True), _field("bio")]
        result = validate_form_data({"bio": "hi"}, fields)
        assert result == {"valid": False, "errors": {"full_name": "Full_Name is required"}}

    def test_form_data_valid(self):
        assert validate_form_data({"full_name": "Ana"}, [_field("full_name", required=True)]) == {
            "valid": True,
            "errors": {},
        }
