"""Tests for presenting stored timestamps."""

from datetime import datetime, timedelta, timezone

import pytest

from app.config import reset_settings_cache
from app.utils.datetime import ensure_app_timezone, get_app_timezone

SEOUL = timezone(timedelta(hours=9))


@pytest.fixture()
def app_timezone(monkeypatch):
    """Set ``APP_TIMEZONE`` (or unset it with ``None``) and reload settings."""

    def apply(value):
        if value is None:
            monkeypatch.delenv("APP_TIMEZONE", raising=False)
        else:
            monkeypatch.setenv("APP_TIMEZONE", value)
        reset_settings_cache()
        get_app_timezone.cache_clear()

    return apply


def test_stored_offset_is_kept_when_no_timezone_is_configured(app_timezone, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    app_timezone(None)
    stored = datetime(2024, 3, 1, 9, 30, tzinfo=SEOUL)

    presented = ensure_app_timezone(stored)

    assert presented == stored
    assert presented.utcoffset() == timedelta(hours=9)


def test_naive_values_are_read_as_utc(app_timezone, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    app_timezone(None)

    presented = ensure_app_timezone(datetime(2024, 3, 1, 0, 30))

    assert presented == datetime(2024, 3, 1, 0, 30, tzinfo=timezone.utc)
    assert presented.utcoffset() == timedelta(0)


def test_configured_timezone_converts_the_instant(app_timezone):
    app_timezone("Asia/Seoul")

    presented = ensure_app_timezone(datetime(2024, 3, 1, 0, 30))

    assert (presented.hour, presented.minute) == (9, 30)
    assert presented.utcoffset() == timedelta(hours=9)


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC-05:00", timedelta(hours=-5)),
        ("GMT+0930", timedelta(hours=9, minutes=30)),
        ("UTC", timedelta(0)),
        ("Not/A_Zone", timedelta(0)),
    ],
)
def test_offset_names_and_unknown_zones(app_timezone, name, offset):
    app_timezone(name)

    presented = ensure_app_timezone(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc))

    assert presented.utcoffset() == offset


def test_missing_value_stays_missing():
    assert ensure_app_timezone(None) is None
