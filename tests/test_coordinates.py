# tests/test_coordinates.py

import pytest

from lunaris.reference import coordinates as co
from lunaris.reference.phase import AU_KM


def test_meeus_example_13a_ecliptic_to_equatorial():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 13.a (Pollux).
    """
    eq = co.ecliptic_to_equatorial(113.215630, 6.684170, 23.4392911)
    assert eq.ra_deg == pytest.approx(116.328942, abs=1e-5)
    assert eq.dec_deg == pytest.approx(28.026183, abs=1e-5)


def test_meeus_example_47a_moon_to_equatorial():
    eq = co.ecliptic_to_equatorial(133.167265, -3.229126, 23.440636)
    assert eq.ra_deg == pytest.approx(134.688470, abs=1e-5)
    assert eq.dec_deg == pytest.approx(13.768368, abs=1e-5)


def test_meeus_example_13b_horizontal():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 13.b (Venus).
    Meeus measures azimuth from the south; 68.0337 there is 248.0337 from north.
    """
    hor = co.equatorial_to_horizontal(64.352133, -6.719892, 38.921389)
    assert hor.azimuth_deg == pytest.approx(248.0337, abs=1e-4)
    assert hor.altitude_deg == pytest.approx(15.1249, abs=1e-4)


def test_horizontal_cardinal_points():
    # on the meridian south of the zenith
    hor = co.equatorial_to_horizontal(0.0, 0.0, 45.0)
    assert hor.azimuth_deg == pytest.approx(180.0, abs=1e-9)
    assert hor.altitude_deg == pytest.approx(45.0, abs=1e-9)

    # six hours before transit the celestial equator rises due east
    hor = co.equatorial_to_horizontal(270.0, 0.0, 45.0)
    assert hor.azimuth_deg == pytest.approx(90.0, abs=1e-9)
    assert hor.altitude_deg == pytest.approx(0.0, abs=1e-9)


def test_horizontal_at_the_pole():
    hor = co.equatorial_to_horizontal(123.0, 30.0, 90.0)
    assert hor.altitude_deg == pytest.approx(30.0, abs=1e-9)
    assert 0.0 <= hor.azimuth_deg < 360.0


def test_meeus_example_11a_rho_phi():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 11.a (Palomar, 1706 m).
    """
    rho_sin, rho_cos = co.rho_phi(33.356111, 1706.0)
    assert rho_sin == pytest.approx(0.546861, abs=1e-6)
    assert rho_cos == pytest.approx(0.836339, abs=1e-6)


def test_meeus_example_40a_topocentric():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 40.a (Mars from Palomar).
    alpha' = 22h38m08.54s, delta' = -15 46' 30.0".
    """
    eq = co.equatorial_to_topocentric(
        339.530208, -15.771083, 0.37276 * AU_KM, 288.7958, 33.356111, 1706.0,
    )
    assert eq.ra_deg == pytest.approx(339.535583, abs=1e-4)
    assert eq.dec_deg == pytest.approx(-15.775, abs=1e-4)


def test_refraction():
    # about 29 arcminutes at the horizon for standard conditions
    assert co.refraction(0.0, 1010.0, 10.0) == pytest.approx(0.48306, abs=1e-4)
    assert co.refraction(90.0) == pytest.approx(0.0, abs=1e-4)
    assert co.refraction(0.0, 505.0, 10.0) == pytest.approx(co.refraction(0.0) / 2.0, abs=1e-12)
    # colder air refracts more
    assert co.refraction(10.0, 1010.0, -10.0) > co.refraction(10.0, 1010.0, 10.0)


def test_refraction_cutoff():
    assert co.refraction(-5.0) == 0.0
    assert co.refraction(co.REFRACTION_CUTOFF_DEG - 1e-6) == 0.0
    assert co.refraction(co.REFRACTION_CUTOFF_DEG) > 0.0
    # monotonic decreasing above the cutoff
    prev = co.refraction(co.REFRACTION_CUTOFF_DEG)
    for k in range(1, 90):
        cur = co.refraction(co.REFRACTION_CUTOFF_DEG + k)
        assert cur < prev
        prev = cur
