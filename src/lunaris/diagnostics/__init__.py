"""Diagnostics package.

- diagnostics: plots of the packaged tables (numpy + matplotlib)
- diagnostics.ephem: optional (requires ephemeris extras + a JPL kernel file)
"""

__all__ = ["plot_deltat"]
