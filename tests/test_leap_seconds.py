# tests/test_leap_seconds.py

import pytest

from lunaris.reference import leap_seconds as ls


@pytest.fixture
def fresh_table():
    ls.load_leap_second_table.cache_clear()
    yield
    ls.load_leap_second_table.cache_clear()


def test_packaged_table_shape():
    tbl = ls.load_leap_second_table()
    assert len(tbl) == 28
    entries = list(tbl)
    assert entries[0] == (2441317.5, 10.0)
    assert entries[-1] == (2457754.5, 37.0)
    # every step after 1972-01-01 is exactly one second
    for (_, a), (_, b) in zip(entries, entries[1:]):
        assert b - a == 1.0


def test_step_function_lookup():
    # 2017-01-01 00:00:00 UTC
    assert ls.leap_seconds(2457754.5) == 37.0
    assert ls.leap_seconds(2457754.5 - 1e-6) == 36.0
    assert ls.leap_seconds(2451545.0) == 32.0
    assert ls.leap_seconds(2459596.101598) == 37.0


def test_before_first_entry_is_zero():
    assert ls.leap_seconds(2441317.5 - 1e-6) == 0.0
    assert ls.leap_seconds(2400000.5) == 0.0


def test_table_validation():
    with pytest.raises(ValueError):
        ls.LeapSecondTable((2.0, 1.0), (10.0, 11.0))
    with pytest.raises(ValueError):
        ls.LeapSecondTable((1.0, 2.0), (11.0, 10.0))
    with pytest.raises(ValueError):
        ls.LeapSecondTable((1.0,), (10.0, 11.0))


def test_env_override(tmp_path, monkeypatch, fresh_table):
    p = tmp_path / "tai_utc.csv"
    p.write_text("date,jd,tai_minus_utc\n2000-01-01,2451544.5,100\n2010-01-01,2455197.5,101\n", encoding="utf-8")
    monkeypatch.setenv(ls.ENV_VAR, str(p))

    assert ls.leap_seconds(2451544.4) == 0.0
    assert ls.leap_seconds(2452000.0) == 100.0
    assert ls.leap_seconds(2460000.0) == 101.0
