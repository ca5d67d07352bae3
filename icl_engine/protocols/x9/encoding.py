"""
X9 Character Encoding

Translation between on-wire bytes and the text handed to record codecs.

ASCII files pass through byte for byte (latin-1 keeps every byte value, so
non-ASCII bytes survive to the validators that reject them). EBCDIC files
are translated with the IBM-1047 codec registered by the ``ebcdic`` package.
Opaque payload ranges (image data, digital signatures, user data) never go
through this layer.
"""

import codecs
from typing import Tuple

import ebcdic  # noqa: F401  registers the cp1047 codec

from icl_engine.protocols.x9.options import CharacterEncoding, ICLOptions

EBCDIC_CODEC = "cp1047"
ASCII_CODEC_NAME = "latin-1"
SUBSTITUTE_ERRORS = "icl-substitute"

# Unicode SUB encodes to the single-byte substitute in both code pages
_SUBSTITUTE = "\x1a"

# Low-values and high-values padding found in some Federal Reserve files
_FRB_BLANK_BYTES = (0x00, 0xFF)


def _substitute_unencodable(error: UnicodeError) -> Tuple[str, int]:
    if isinstance(error, UnicodeEncodeError):
        return _SUBSTITUTE * (error.end - error.start), error.end
    raise error


codecs.register_error(SUBSTITUTE_ERRORS, _substitute_unencodable)


class CharacterCodec:
    """Single-byte bidirectional translator for record text."""

    def __init__(
        self,
        encoding: CharacterEncoding = CharacterEncoding.ASCII,
        frb_compatibility_mode: bool = False,
    ):
        self.encoding = encoding
        self.frb_compatibility_mode = frb_compatibility_mode
        self.codec_name = EBCDIC_CODEC if encoding is CharacterEncoding.EBCDIC else ASCII_CODEC_NAME
        self._blank = self.encode(" ")

    @classmethod
    def for_options(cls, options: ICLOptions) -> "CharacterCodec":
        return cls(options.encoding, options.frb_compatibility_mode)

    def decode(self, raw: bytes) -> str:
        if self.frb_compatibility_mode and self.encoding is CharacterEncoding.EBCDIC:
            raw = bytes(self._blank[0] if b in _FRB_BLANK_BYTES else b for b in raw)
        return raw.decode(self.codec_name, errors="replace")

    def encode(self, text: str) -> bytes:
        return text.encode(self.codec_name, errors=SUBSTITUTE_ERRORS)


ASCII = CharacterCodec()
