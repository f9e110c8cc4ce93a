from types import SimpleNamespace

import pytest

from flowhr_attendance.common.datetime_utils import format_minutes
from flowhr_attendance.config import get_settings_module
from flowhr_attendance.container import build_origin_lookup
from flowhr_attendance.location.origin import HttpOriginLookup, RequestOriginLookup


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "flowhr_attendance.config.production"),
        ("test", "flowhr_attendance.config.testing"),
        ("anything", "flowhr_attendance.config.development"),
    ],
)
def test_settings_module_follows_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_origin_lookup_from_settings():
    http = build_origin_lookup(
        SimpleNamespace(ORIGIN_LOOKUP="http", ORIGIN_LOOKUP_URL="https://echo.example/", ORIGIN_LOOKUP_TIMEOUT_SECONDS=1)
    )
    local = build_origin_lookup(SimpleNamespace(ORIGIN_LOOKUP="request", TRUST_PROXY_HEADERS=True))

    assert isinstance(http, HttpOriginLookup)
    assert isinstance(local, RequestOriginLookup)

    with pytest.raises(ValueError):
        build_origin_lookup(SimpleNamespace(ORIGIN_LOOKUP="carrier-pigeon"))


@pytest.mark.parametrize("minutes, text", [(250, "04:10"), (0, "00:00"), (None, None)])
def test_format_minutes(minutes, text):
    assert format_minutes(minutes) == text
