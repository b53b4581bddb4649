"""Readers for Bruker Esprit spectrum text exports."""

from .channels import RowResult, RowStatus, parse_row, read_channel_table
from .errors import FormatError
from .header import HEADER_FIELDS, HeaderField, HeaderResult, check_signature, parse_header
from .readers import decode_bruker_txt, read_bruker_txt, read_spectrum
from .sniffing import is_bruker_txt, is_bruker_txt_file

__all__ = [
    "FormatError",
    # Detection
    "is_bruker_txt",
    "is_bruker_txt_file",
    # Header
    "HEADER_FIELDS",
    "HeaderField",
    "HeaderResult",
    "check_signature",
    "parse_header",
    # Channel table
    "RowResult",
    "RowStatus",
    "parse_row",
    "read_channel_table",
    # Decoding
    "decode_bruker_txt",
    "read_bruker_txt",
    "read_spectrum",
]
