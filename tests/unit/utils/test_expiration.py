from datetime import timedelta

import pytest

from src.api.utils.expiration import humanize_expiration, parse_expiration
from src.app.use_cases.password_reset import ResetSettings


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5m", timedelta(minutes=5)),
        ("30s", timedelta(seconds=30)),
        ("1h", timedelta(hours=1)),
        ("2d", timedelta(days=2)),
        ("", timedelta(minutes=5)),
        ("five minutes", timedelta(minutes=5)),
        ("10x", timedelta(minutes=5)),
    ],
)
def test_parse_expiration(value, expected):
    assert parse_expiration(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        ("5m", "5 minutes"),
        ("1m", "1 minute"),
        ("1h", "1 hour"),
        ("45s", "45 seconds"),
        ("bogus", "5 minutes"),
    ],
)
def test_humanize_expiration(value, expected):
    assert humanize_expiration(value) == expected


def test_reset_link_uses_first_frontend_url():
    settings = ResetSettings(
        frontend_url="https://reset.example.edu/ , https://other.example.edu",
        reset_password_path="reset-password?token",
    )

    assert (
        settings.reset_link("abc.def")
        == "https://reset.example.edu/reset-password?token=abc.def"
    )
