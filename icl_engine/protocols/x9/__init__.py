"""
X9.100-187 / DSTU X9.37 Image Cash Letter codec.

Parses ICL byte streams into an ICLFile tree, validates the tree and
writes it back byte for byte, with fixed or length-prefixed framing and
ASCII or EBCDIC text.
"""

from .options import (
    DEFAULT_OPTIONS,
    CharacterEncoding,
    Dialect,
    Framing,
    ICLOptions,
)
from .encoding import CharacterCodec
from .containers import Bundle, CashLetter, ICLFile
from .framing import RecordSink, RecordStream
from .icl_reader import ICLReader, read_file
from .icl_writer import ICLWriter, write_file
from .records import *  # noqa: F401,F403
from .records import __all__ as _records_all

__all__ = [
    "DEFAULT_OPTIONS",
    "CharacterEncoding",
    "Dialect",
    "Framing",
    "ICLOptions",
    "CharacterCodec",
    "Bundle",
    "CashLetter",
    "ICLFile",
    "RecordSink",
    "RecordStream",
    "ICLReader",
    "read_file",
    "ICLWriter",
    "write_file",
] + list(_records_all)
