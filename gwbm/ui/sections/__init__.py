from .summary import render_summary, render_table
from .ensemble import render_ensemble

__all__ = [
    "render_summary",
    "render_table",
    "render_ensemble",
]
