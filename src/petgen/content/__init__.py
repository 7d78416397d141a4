"""Loading of the versioned attribute-table asset."""

from .registry import TABLES_ENV_VAR, default_tables, ladder_for, load_tables

__all__ = ["TABLES_ENV_VAR", "default_tables", "ladder_for", "load_tables"]
