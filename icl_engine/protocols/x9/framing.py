"""
X9 Record Framing

Splits a byte stream into records and writes records back out.

Fixed framing:
    Records follow each other back to back. The record type decides the
    record length; Image View Data and User records are followed through
    their declared payload lengths. Line terminators between records are
    skipped on read and written after each record.

Variable framing:
    Every record is preceded by its length as a 4-byte big-endian unsigned
    integer, not counting the prefix itself.
"""

import logging
import struct
from typing import BinaryIO, Iterator, Optional

from icl_engine.core.exceptions import FileError
from icl_engine.protocols.x9.encoding import CharacterCodec
from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions
from icl_engine.protocols.x9.records import X9Record, record_class

logger = logging.getLogger(__name__)

LENGTH_PREFIX = struct.Struct(">I")

MSG_UNKNOWN_RECORD_TYPE = "is an unknown record type"
MSG_LINE_TOO_LONG = "line too long: record of %d bytes exceeds the buffer size of %d"
MSG_SHORT_READ = "unexpected end of file: expected %d bytes and found %d"

# CR and LF, plus the EBCDIC NL and LF code points
_ASCII_TERMINATORS = frozenset(b"\r\n")
_EBCDIC_TERMINATORS = frozenset(b"\r\n\x15\x25")


class RecordStream:
    """
    Iterates over the raw records of a byte stream.

    Yields the bytes of each record, record type included and framing
    excluded. line_number counts the records returned so far.
    """

    def __init__(
        self,
        stream: BinaryIO,
        options: Optional[ICLOptions] = None,
        codec: Optional[CharacterCodec] = None,
    ):
        self.stream = stream
        self.options = options or DEFAULT_OPTIONS
        self.codec = codec or CharacterCodec.for_options(self.options)
        self.line_number = 0
        self._record_size = 0
        self._terminators = _EBCDIC_TERMINATORS if self.options.is_ebcdic else _ASCII_TERMINATORS

    def __iter__(self) -> Iterator[bytes]:
        while True:
            raw = self.next_record()
            if raw is None:
                return
            yield raw

    def next_record(self) -> Optional[bytes]:
        """Bytes of the next record, or None at end of input."""
        if self.options.is_variable_length:
            raw = self._next_variable()
        else:
            raw = self._next_fixed()
        if raw is None:
            logger.debug(f"End of input after {self.line_number} records")
            return None
        self.line_number += 1
        return raw

    def _read(self, size: int) -> bytes:
        data = self.stream.read(size)
        if len(data) != size:
            raise FileError("RecordLength", MSG_SHORT_READ % (size, len(data)))
        return data

    def _next_variable(self) -> Optional[bytes]:
        prefix = self.stream.read(LENGTH_PREFIX.size)
        if not prefix:
            return None
        if len(prefix) != LENGTH_PREFIX.size:
            raise FileError("RecordLength", MSG_SHORT_READ % (LENGTH_PREFIX.size, len(prefix)))
        (length,) = LENGTH_PREFIX.unpack(prefix)
        if length > self.options.buffer_size:
            raise FileError("RecordLength", MSG_LINE_TOO_LONG % (length, self.options.buffer_size))
        return self._read(length)

    def _read_record_bytes(self, size: int) -> bytes:
        self._record_size += size
        if self._record_size > self.options.buffer_size:
            raise FileError("RecordLength", MSG_LINE_TOO_LONG % (self._record_size, self.options.buffer_size))
        return self._read(size)

    def _next_fixed(self) -> Optional[bytes]:
        first = self.stream.read(1)
        while first and first[0] in self._terminators:
            first = self.stream.read(1)
        if not first:
            return None
        head = first + self._read(1)
        record_type = self.codec.decode(head)
        cls = record_class(record_type)
        if cls is None:
            raise FileError("recordType", MSG_UNKNOWN_RECORD_TYPE, record_type)
        self._record_size = len(head)
        return cls.read_wire(head, self._read_record_bytes, self.codec)


class RecordSink:
    """Writes records to a byte stream with the configured framing and encoding."""

    def __init__(
        self,
        stream: BinaryIO,
        options: Optional[ICLOptions] = None,
        codec: Optional[CharacterCodec] = None,
    ):
        self.stream = stream
        self.options = options or DEFAULT_OPTIONS
        self.codec = codec or CharacterCodec.for_options(self.options)
        self.records_written = 0

    def write_record(self, record: X9Record) -> None:
        raw = record.to_raw(self.codec)
        if self.options.is_variable_length:
            self.stream.write(LENGTH_PREFIX.pack(len(raw)))
            self.stream.write(raw)
        else:
            self.stream.write(raw)
            self.stream.write(self.options.line_terminator)
        self.records_written += 1

    def flush(self) -> None:
        flush = getattr(self.stream, "flush", None)
        if flush is not None:
            flush()
