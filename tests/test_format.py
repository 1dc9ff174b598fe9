# tests/test_format.py

import math

import pytest

from lunaris.format import hours_to_hms, to_dms, to_hms


def test_dms():
    assert to_dms(13.769657226951539, 3) == "13° 46' 10.766\""
    assert to_dms(-13.769657226951539, 3) == "-13° 46' 10.766\""
    assert to_dms(0.5, 0) == "0° 30' 0\""


def test_hms():
    assert to_hms(241.6958092513155, 3) == "16h 6m 46.994s"
    assert hours_to_hms(1.5, 0) == "1h 30m 0s"


def test_rounding_carries_into_minutes_and_degrees():
    assert to_dms(59.999999, 2) == "60° 0' 0.00\""
    assert to_dms(10.0 + 59.9999 / 3600.0, 2) == "10° 1' 0.00\""
    assert to_dms(59.9999, 2) == "59° 59' 59.64\""


def test_width_pads_minutes_and_seconds():
    assert to_dms(5.5, 1, width=2) == "5° 30' 00.0\""
    assert to_dms(5.1, 0, width=2) == "5° 06' 00\""
    assert hours_to_hms(7.0 + 5.0 / 60.0 + 3.25 / 3600.0, 2, width=2) == "7h 05m 03.25s"


def test_no_negative_zero():
    assert to_dms(-0.0000001, 2) == "0° 0' 0.00\""


@pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf])
def test_non_finite_rejected(bad):
    with pytest.raises(ValueError):
        to_dms(bad)


def test_negative_precision_rejected():
    with pytest.raises(ValueError):
        to_hms(10.0, precision=-1)
