import pytest

from dqprofile.config import env_int


@pytest.mark.parametrize("raw,expected", [("4", 4), (" 8 ", 8), ("abc", 1), ("2.5", 1), ("", 1), ("0", 1), ("-3", 1)])
def test_env_int(monkeypatch, raw, expected):
    monkeypatch.setenv("DQ_MAX_WORKERS", raw)
    assert env_int("DQ_MAX_WORKERS", 1) == expected


def test_env_int_unset(monkeypatch):
    monkeypatch.delenv("DQ_MAX_WORKERS", raising=False)
    assert env_int("DQ_MAX_WORKERS", 3) == 3


def test_env_int_logs_bad_value(monkeypatch, caplog):
    monkeypatch.setenv("DQ_MAX_WORKERS", "many")
    with caplog.at_level("WARNING", logger="dqprofile.config"):
        assert env_int("DQ_MAX_WORKERS", 1) == 1
    assert "DQ_MAX_WORKERS" in caplog.text
