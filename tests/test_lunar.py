# tests/test_lunar.py

import pytest

from lunaris.reference import lunar
from lunaris.reference.coordinates import rho_phi
from lunaris.reference.solar import solar_position


def test_meeus_example_47a_moon_position():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 47.a.
    1992 April 12, 0h TD: lambda = 133.162655 (133.167265 apparent),
    beta = -3.229126, Delta = 368409.7 km, pi = 0.991990.
    """
    pos = lunar.lunar_position(2448724.5)

    assert pos.L_true_deg == pytest.approx(133.162655, abs=2e-6)
    assert pos.L_app_deg == pytest.approx(133.167265, abs=1e-5)
    assert pos.B_deg == pytest.approx(-3.229126, abs=2e-6)
    assert pos.distance_km == pytest.approx(368409.7, abs=0.1)

    assert lunar.equatorial_horizontal_parallax_deg(pos.distance_km) == pytest.approx(0.991990, abs=1e-5)


def test_reference_instant_2022():
    # 2022-01-16 14:26:18, evaluated as TT
    pos = lunar.lunar_position(2459596.101598)
    assert pos.L_app_deg == pytest.approx(101.04539708, abs=1e-3)
    assert pos.B_deg == pytest.approx(3.32269769, abs=1e-3)
    assert pos.distance_km == pytest.approx(403836.9196, abs=1e-3)


def test_distance_bounds():
    # perigee and apogee stay within roughly 356000..407000 km
    for k in range(400):
        d = lunar.lunar_position(2451545.0 + 0.75 * k).distance_km
        assert 355000.0 < d < 407500.0


def test_parallax_and_semidiameter():
    d = lunar.MEAN_DISTANCE_KM
    pi = lunar.equatorial_horizontal_parallax_deg(d)
    assert pi == pytest.approx(0.9492, abs=1e-3)
    assert lunar.horizontal_parallax_deg(d, 0.0) == pytest.approx(pi, abs=1e-12)
    assert lunar.horizontal_parallax_deg(d, 90.0) == pytest.approx(0.0, abs=1e-12)
    # about 15.52 arcminutes at the mean distance
    assert lunar.semidiameter_deg(d) * 60.0 == pytest.approx(15.52, abs=0.02)


def test_topocentric_semidiameter_grows_towards_zenith():
    d = 368409.7
    rho_sin, rho_cos = rho_phi(45.0, 0.0)
    # Moon on the meridian with declination equal to the latitude: near the zenith
    s_zenith = lunar.topocentric_semidiameter_deg(d, 0.0, 45.0, rho_sin, rho_cos)
    s_horizon = lunar.topocentric_semidiameter_deg(d, 90.0, 0.0, rho_sin, rho_cos)
    s_geo = lunar.semidiameter_deg(d)

    assert s_zenith > s_geo
    assert s_zenith - s_geo == pytest.approx(s_geo * 0.0165, rel=0.1)
    assert s_horizon == pytest.approx(s_geo, abs=2e-4)


def test_meeus_example_25a_sun():
    """
    Jean Meeus, Astronomical Algorithms (2nd Ed), Example 25.a.
    1992 October 13, 0h TD: true longitude 199.90988, R = 0.99766 AU,
    apparent longitude 199.90895 (low accuracy method).
    """
    sun = solar_position(2448908.5)
    assert sun.L_true_deg == pytest.approx(199.90988, abs=1e-4)
    assert sun.R_au == pytest.approx(0.99766, abs=1e-5)
    assert sun.L_app_deg == pytest.approx(199.90895, abs=0.01)
    assert sun.B_deg == 0.0
