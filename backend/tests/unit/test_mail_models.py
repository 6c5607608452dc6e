"""Unit tests for mail value types: identifier normalization and staff criteria"""

from datetime import date, datetime, timedelta, timezone

import pytest

from domain.mail import StaffFilter, StatusFilter, ValidationError, normalize_identifier
from domain.mail.models import ensure_utc, require_identifier


class TestNormalizeIdentifier:
    """Room numbers and initials are trimmed and upper-cased"""

    @pytest.mark.parametrize("raw,expected", [
        ("  kb ", "KB"),
        ("210", "210"),
        ("12a", "12A"),
        ("", ""),
        ("   ", ""),
        (None, ""),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_identifier(raw) == expected

    def test_require_identifier_rejects_blank(self):
        with pytest.raises(ValidationError) as exc_info:
            require_identifier("   ", "Room number")
        assert str(exc_info.value) == "Room number is required"

    def test_require_identifier_returns_normalized(self):
        assert require_identifier(" jd", "Initials") == "JD"


class TestStaffFilter:
    """Test staff browse criteria"""

    def test_defaults_match_everything(self):
        criteria = StaffFilter()
        assert criteria.is_default is True
        assert criteria.status == StatusFilter.ALL
        assert criteria.date is None

    def test_whitespace_search_term_counts_as_default(self):
        assert StaffFilter(search_term="   ").is_default is True

    def test_any_active_filter_is_not_default(self):
        assert StaffFilter(search_term="21").is_default is False
        assert StaffFilter(status=StatusFilter.PENDING).is_default is False
        assert StaffFilter(date=date(2024, 3, 1)).is_default is False

    def test_from_params_parses_values(self):
        criteria = StaffFilter.from_params(search_term="kb", status="received", date_value="2024-03-01")
        assert criteria.search_term == "kb"
        assert criteria.status == StatusFilter.RECEIVED
        assert criteria.date == date(2024, 3, 1)

    def test_from_params_treats_empty_strings_as_no_filter(self):
        criteria = StaffFilter.from_params(search_term="", status="", date_value="")
        assert criteria.is_default is True

    def test_from_params_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            StaffFilter.from_params(status="lost")

    def test_from_params_rejects_bad_date(self):
        with pytest.raises(ValidationError):
            StaffFilter.from_params(date_value="01-03-2024")


class TestEnsureUtc:
    def test_naive_value_is_taken_as_utc(self):
        value = ensure_utc(datetime(2024, 3, 1, 9, 30))
        assert value.tzinfo == timezone.utc
        assert value.hour == 9

    def test_aware_value_is_converted(self):
        plus_two = timezone(timedelta(hours=2))
        value = ensure_utc(datetime(2024, 3, 1, 9, 30, tzinfo=plus_two))
        assert value == datetime(2024, 3, 1, 7, 30, tzinfo=timezone.utc)
