# tests/test_diagnostics.py

import os

import pytest


def test_plot_deltat_writes_png(tmp_path):
    pytest.importorskip("numpy")
    matplotlib = pytest.importorskip("matplotlib")
    matplotlib.use("Agg")

    from lunaris.diagnostics import plot_deltat

    out = tmp_path / "deltat.png"
    rc = plot_deltat.main(["--y0", "2000", "--y1", "2040", "--step", "1", "--show-table", "--out", str(out)])
    assert rc == 0
    assert out.exists() and out.stat().st_size > 0


@pytest.fixture
def kernel_path():
    pytest.importorskip("skyfield")
    pytest.importorskip("jplephem")
    p = os.environ.get("LUNARIS_TEST_KERNEL", "").strip()
    if not p:
        pytest.skip("set LUNARIS_TEST_KERNEL to a local JPL kernel (e.g. de421.bsp)")
    return p


def test_analytical_moon_against_jpl(kernel_path):
    from lunaris.ephemeris.jpl import JplMoon
    from lunaris.reference import astro_args as aa
    from lunaris.reference.lunar import lunar_position

    jpl = JplMoon.load(kernel_path)
    jd = 2448724.5
    assert jpl.covers(jd)

    ref = jpl.position(jd)
    lun = lunar_position(jd)
    # the truncated series is good to about 10" in longitude and 4" in latitude
    assert abs(aa.wrap180(lun.L_app_deg - ref.longitude_deg)) * 3600.0 < 30.0
    assert abs(lun.B_deg - ref.latitude_deg) * 3600.0 < 15.0
    assert abs(lun.distance_km - ref.distance_km) < 30.0
