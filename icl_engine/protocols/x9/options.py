"""
X9 Reader/Writer Options

Immutable settings threaded through the reader, the writer and every
validator. Nothing below this layer consults the process environment;
see icl_engine.core.config for environment and YAML loading.
"""

from dataclasses import dataclass, replace
from enum import Enum


class Framing(str, Enum):
    """How record boundaries are found on the wire."""

    FIXED = "fixed"
    VARIABLE = "variable"


class CharacterEncoding(str, Enum):
    """Character set of the text portions of each record."""

    ASCII = "ascii"
    EBCDIC = "ebcdic"


class Dialect(str, Enum):
    """Format dialect selecting a handful of validation rules."""

    X9_100_187 = "x9.100-187"
    DSTU = "dstu"


# bufio-style line scanner default
DEFAULT_BUFFER_SIZE = 64 * 1024

# Upper bound for any declared variable-length payload
DEFAULT_MAX_PAYLOAD_LENGTH = 16 * 1024 * 1024


@dataclass(frozen=True)
class ICLOptions:
    """
    Codec options.

    Attributes:
        framing: fixed-width records or 4-byte big-endian length prefixes
        encoding: ASCII pass-through or IBM-1047
        dialect: X9.100-187 (default) or DSTU X9.37
        frb_compatibility_mode: accept the Federal Reserve relaxations
        buffer_size: largest record the reader will hold
        max_payload_length: largest declared image, signature or user data length
        line_terminator: bytes written after each record under fixed framing
    """

    framing: Framing = Framing.FIXED
    encoding: CharacterEncoding = CharacterEncoding.ASCII
    dialect: Dialect = Dialect.X9_100_187
    frb_compatibility_mode: bool = False
    buffer_size: int = DEFAULT_BUFFER_SIZE
    max_payload_length: int = DEFAULT_MAX_PAYLOAD_LENGTH
    line_terminator: bytes = b"\n"

    @property
    def is_variable_length(self) -> bool:
        return self.framing is Framing.VARIABLE

    @property
    def is_ebcdic(self) -> bool:
        return self.encoding is CharacterEncoding.EBCDIC

    @property
    def is_dstu(self) -> bool:
        return self.dialect is Dialect.DSTU

    def with_changes(self, **changes) -> "ICLOptions":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


DEFAULT_OPTIONS = ICLOptions()
