"""
ICL Writer

Emits an ICLFile as a byte stream. The file is built first (control
records recomputed and every record validated), then written in file
order with the configured framing and encoding.
"""

import logging
from pathlib import Path
from typing import BinaryIO, Optional, Union

from icl_engine.protocols.x9.containers import ICLFile
from icl_engine.protocols.x9.framing import RecordSink
from icl_engine.protocols.x9.options import DEFAULT_OPTIONS, ICLOptions

logger = logging.getLogger(__name__)


class ICLWriter:
    """
    Writes ICL files to a binary stream.

    Example:
        with open("out.x9", "wb") as fp:
            ICLWriter(fp, options).write(icl)
    """

    def __init__(self, stream: BinaryIO, options: Optional[ICLOptions] = None):
        self.options = options or DEFAULT_OPTIONS
        self.sink = RecordSink(stream, self.options)

    def write(self, icl_file: ICLFile, build: bool = True) -> int:
        """
        Write icl_file and return the number of records written.

        With build=False the control records are written as they are; the
        file is still validated.
        """
        if build:
            icl_file.create(self.options)
        else:
            icl_file.validate(self.options)

        for record in icl_file.records():
            logger.debug(f"Writing {record.record_name()}")
            self.sink.write_record(record)
        self.sink.flush()

        logger.info(
            f"Wrote {self.sink.records_written} records "
            f"({self.options.framing.value} framing, {self.options.encoding.value})"
        )
        return self.sink.records_written


def write_file(icl_file: ICLFile, path: Union[str, Path], options: Optional[ICLOptions] = None) -> int:
    """Build and write icl_file to path."""
    with open(path, "wb") as fp:
        return ICLWriter(fp, options).write(icl_file)
