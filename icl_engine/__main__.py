"""
ICL Engine - Command Line Interface

Usage:
    python -m icl_engine read sample.x9
    python -m icl_engine validate --encoding ebcdic --framing variable sample.x9
    python -m icl_engine convert sample.x9 sample.json
    python -m icl_engine convert sample.json out.x9 --output-encoding ebcdic
"""

import sys
import logging
from pathlib import Path
from typing import List, Optional

from .core.config import ICLConfig
from .core.exceptions import ICLException
from .protocols.x9.containers import ICLFile
from .protocols.x9.icl_reader import read_file
from .protocols.x9.icl_writer import write_file
from .protocols.x9.options import CharacterEncoding, Dialect, Framing, ICLOptions

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"


def _build_parser():
    import argparse

    parser = argparse.ArgumentParser(description="Image Cash Letter (X9.100-187) reader, validator and converter")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    parser.add_argument("--framing", choices=[f.value for f in Framing], help="Record framing")
    parser.add_argument("--encoding", choices=[e.value for e in CharacterEncoding], help="Character encoding")
    parser.add_argument("--dialect", choices=[d.value for d in Dialect], help="Format dialect")
    parser.add_argument("--frb", action="store_true", default=None, help="Enable FRB compatibility mode")
    parser.add_argument("--buffer-size", type=int, help="Largest record the reader will accept, in bytes")

    subparsers = parser.add_subparsers(dest="command", required=True)

    read_parser = subparsers.add_parser("read", help="Read a file and print its JSON tree")
    read_parser.add_argument("path", type=Path)

    validate_parser = subparsers.add_parser("validate", help="Read and fully validate a file")
    validate_parser.add_argument("path", type=Path)

    convert_parser = subparsers.add_parser(
        "convert", help="Convert between framings, encodings and JSON (by .json suffix)"
    )
    convert_parser.add_argument("input", type=Path)
    convert_parser.add_argument("output", type=Path)
    convert_parser.add_argument("--output-framing", choices=[f.value for f in Framing])
    convert_parser.add_argument("--output-encoding", choices=[e.value for e in CharacterEncoding])

    return parser


def resolve_options(args) -> ICLOptions:
    """Configuration file or environment, overridden by command line flags."""
    if args.config:
        config = ICLConfig.load_from_file(args.config)
    else:
        config = ICLConfig.load_from_env()

    if args.framing:
        config.framing = args.framing
    if args.encoding:
        config.encoding = args.encoding
    if args.dialect:
        config.dialect = args.dialect
    if args.frb:
        config.frb_compatibility_mode = True
    if args.buffer_size is not None:
        config.buffer_size = args.buffer_size

    return config.to_options()


def _load(path: Path, options: ICLOptions) -> ICLFile:
    if path.suffix.lower() == JSON_SUFFIX:
        return ICLFile.from_json(path.read_text())
    return read_file(path, options)


def run(args) -> int:
    options = resolve_options(args)

    if args.command == "read":
        icl = read_file(args.path, options)
        print(icl.to_json())
        return 0

    if args.command == "validate":
        icl = read_file(args.path, options)
        icl.validate(options)
        print(f"{args.path}: valid ({icl.record_count()} records, {len(icl.cash_letters)} cash letters)")
        return 0

    if args.command == "convert":
        icl = _load(args.input, options)
        if args.output.suffix.lower() == JSON_SUFFIX:
            icl.validate(options)
            args.output.write_text(icl.to_json())
            logger.info(f"Wrote JSON to {args.output}")
            return 0
        changes = {}
        if args.output_framing:
            changes["framing"] = Framing(args.output_framing)
        if args.output_encoding:
            changes["encoding"] = CharacterEncoding(args.output_encoding)
        write_file(icl, args.output, options.with_changes(**changes))
        return 0

    return 1


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    try:
        sys.exit(run(args))
    except ICLException as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"I/O error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
