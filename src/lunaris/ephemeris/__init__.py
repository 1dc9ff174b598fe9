"""Reference Moon positions from JPL kernels (optional).

lunaris.ephemeris.jpl reads a local SPK file (de421.bsp, de440s.bsp, ...)
through skyfield and jplephem. Nothing is downloaded: pass the kernel path.
Install with:
  pip install "lunaris[ephemeris]"
"""


def require_ephemeris() -> None:
    """Raise a clear error if the ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import skyfield  # noqa: F401
    except ImportError as e:
        raise RuntimeError('JPL kernels need: pip install "lunaris[ephemeris]"') from e
