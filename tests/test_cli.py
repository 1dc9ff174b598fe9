# tests/test_cli.py

import pytest

from lunaris.cli import main


def test_jd(capsys):
    assert main(["jd", "2022-01-16", "14:26:18"]) == 0
    out = capsys.readouterr().out
    assert "JD_UTC = 2459596.10159722" in out
    assert "JD_TT" in out and "JD_UT1" in out


def test_calendar(capsys):
    assert main(["calendar", "2451545.0"]) == 0
    assert capsys.readouterr().out.strip() == "2000-01-01 12:00:00.000"


def test_deltat(capsys):
    assert main(["deltat", "--date", "2000-01-01"]) == 0
    out = capsys.readouterr().out
    assert "TAI-UTC       = 32 s" in out
    assert "extrapolated" not in out


def test_sidereal(capsys):
    assert main(["sidereal", "--jd", "2446895.5"]) == 0
    out = capsys.readouterr().out
    assert "GMST = 197.69319" in out


def test_moon(capsys):
    rc = main([
        "moon", "--jd", "2459596.101598",
        "--lon", "-116.8649959122331", "--lat", "33.35632175573314", "--height", "1706",
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Full Moon" in out
    assert "Distance  = 403836.9" in out
    assert "Events" not in out


def test_moon_with_events_east_longitude(capsys):
    rc = main([
        "moon", "--date", "2000-03-23", "--time", "12:00",
        "--lon-east", "11.6", "--lat", "48.1", "--civil", "--events",
    ])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Rise    : 2000-03-23 21:" in out


def test_riseset_missing_event(capsys):
    rc = main(["riseset", "2000-03-25", "--lon", "0.1009", "--lat", "51.5319"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Rise    : none on this day" in out


def test_format(capsys):
    assert main(["format", "13.769657226951539", "--precision", "3"]) == 0
    assert capsys.readouterr().out.strip() == "13° 46' 10.766\""

    assert main(["format", "241.6958092513155", "--hms", "--precision", "3"]) == 0
    assert capsys.readouterr().out.strip() == "16h 6m 46.994s"


def test_domain_error_exit_code(capsys):
    rc = main(["moon", "--jd", "2451545.0", "--lon", "0", "--lat", "95"])
    assert rc == 2
    assert capsys.readouterr().err.startswith("error:")


def test_bad_date_is_usage_error():
    with pytest.raises(SystemExit):
        main(["jd", "16/01/2022"])
