"""Output backends for VALID8 (truth-table rendering)."""

from .table import print_table, render_table

__all__ = ["print_table", "render_table"]
