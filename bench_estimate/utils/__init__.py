"""
工具模块
"""

from .formatters import (
    show_picos,
    show_bytes,
    pretty_estimate,
    csv_estimate,
    csv_header,
    encode_csv,
    decode_csv,
)

__all__ = [
    "show_picos",
    "show_bytes",
    "pretty_estimate",
    "csv_estimate",
    "csv_header",
    "encode_csv",
    "decode_csv",
]
