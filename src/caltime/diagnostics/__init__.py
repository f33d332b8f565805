"""Diagnostics package.

- leap_table: always available, prints the registry
- plot_tai_utc: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["leap_table", "plot_tai_utc"]
