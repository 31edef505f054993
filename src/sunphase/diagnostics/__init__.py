"""Diagnostics package.

Light-weight tools that sweep the engine over a year. They need the
diagnostics extras:
  pip install "sunphase[diagnostics]"
"""

__all__ = ["year_table", "day_length_plot"]
