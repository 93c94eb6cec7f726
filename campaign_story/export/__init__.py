"""
Export module - portable renderings of a session.
"""

from .formatter import (
    FORMAT_CSV,
    FORMAT_JSON,
    export_csv,
    export_json,
    export_session,
    parse_csv_export,
    parse_json_export,
)

__all__ = [
    "FORMAT_CSV",
    "FORMAT_JSON",
    "export_csv",
    "export_json",
    "export_session",
    "parse_csv_export",
    "parse_json_export",
]
