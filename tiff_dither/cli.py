"""Command-line interface for tiff_dither.

Supports headless conversion (optionally as JSON for scripting), a
directory dump, and the interactive viewer.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from tiff_dither.core.dither import DitherMethod
from tiff_dither.core.greyscale import GreyMode

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tiff-dither",
        description="Convert an uncompressed RGB TIFF to a dithered bilevel image.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- convert subcommand ---
    convert = subparsers.add_parser(
        "convert",
        help="Dither a TIFF and write the bilevel result.",
    )
    convert.add_argument("input", help="Input TIFF file path.")
    convert.add_argument(
        "-o", "--output",
        help="Output path; the extension picks the format "
        "(.tif, .png, .bmp, .pbm, .gif, .raw). Defaults to <input>_dithered.tif.",
    )
    convert.add_argument(
        "--method",
        choices=[m.value for m in DitherMethod],
        default=DitherMethod.FLOYD_STEINBERG.value,
        help="Dithering method (default: floyd-steinberg).",
    )
    convert.add_argument(
        "--grey",
        choices=[g.value for g in GreyMode],
        default=GreyMode.RMS.value,
        help="Greyscale reduction (default: rms).",
    )
    convert.add_argument(
        "--invert",
        action="store_true",
        help="Invert luminance before dithering.",
    )
    convert.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the header, directory and image summary while decoding.",
    )
    convert.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON (pipe-friendly).",
    )
    convert.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces on error (with --json).",
    )

    # --- info subcommand ---
    info = subparsers.add_parser(
        "info",
        help="Show the TIFF header, directory and image summary.",
    )
    info.add_argument("input", help="Input TIFF file path.")
    info.add_argument(
        "--json",
        action="store_true",
        help="Output structured JSON.",
    )

    # --- view subcommand ---
    view = subparsers.add_parser("view", help="Open the interactive viewer.")
    view.add_argument("input", help="Input TIFF file path.")

    return parser


def _json_error(message: str, code: str) -> None:
    """Print JSON error to stderr and exit with code 1."""
    err = {"status": "error", "error": message, "code": code}
    print(json.dumps(err), file=sys.stderr)
    sys.exit(1)


def _fail(message: str, code: str, is_json: bool) -> None:
    if is_json:
        _json_error(message, code)
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _load(raw_input: str, is_json: bool) -> tuple[Path, bytes]:
    from tiff_dither.core.reader import read_file

    input_path = Path(raw_input).resolve()
    try:
        return input_path, read_file(input_path)
    except FileNotFoundError:
        _fail(f"File not found: {input_path}", "FILE_NOT_FOUND", is_json)
    except OSError as e:
        _fail(f"Cannot read {input_path}: {e}", "INVALID_INPUT", is_json)


def _run_convert(args: argparse.Namespace) -> None:
    """Run the headless convert pipeline."""
    from tiff_dither.core.errors import TiffDecodeError
    from tiff_dither.core.processor import Settings, process_bytes
    from tiff_dither.core.report import ConsoleDiagnostics
    from tiff_dither.core.writer import default_output_path, save_output

    is_json = args.json
    input_path, data = _load(args.input, is_json)

    if args.output:
        output_path = Path(args.output).resolve()
    else:
        output_path = default_output_path(input_path)

    settings = Settings(
        method=DitherMethod(args.method),
        grey_mode=GreyMode(args.grey),
        invert=args.invert,
    )
    diagnostics = ConsoleDiagnostics() if args.verbose else None
    logger.debug("Converting %s -> %s with %s", input_path, output_path, settings)

    try:
        processed = process_bytes(data, settings, diagnostics)
    except TiffDecodeError as e:
        if is_json and args.debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        _fail(str(e), e.code, is_json)

    try:
        save_output(processed.raster, output_path)
    except (OSError, ValueError) as e:
        if is_json and args.debug:
            import traceback
            traceback.print_exc(file=sys.stderr)
        _fail(str(e), "PROCESSING_ERROR", is_json)

    if not is_json:
        print(f"Saved to {output_path}", file=sys.stderr)
        return

    d = processed.descriptor
    result = {
        "status": "success",
        "input": str(input_path),
        "output": str(output_path),
        "settings": {
            "method": settings.method.value,
            "grey": settings.grey_mode.value,
            "invert": settings.invert,
        },
        "metadata": {
            "byte_order": processed.decoded.endianness.value,
            "width": d.width,
            "height": d.height,
            "samples_per_pixel": d.samples_per_pixel,
            "output_format": output_path.suffix.lstrip("."),
            "black_pixels": int((processed.raster == 0).sum()),
        },
    }
    print(json.dumps(result, indent=2))


def _run_info(args: argparse.Namespace) -> None:
    """Decode and describe the file without loading pixels."""
    from tiff_dither.core.errors import TiffDecodeError
    from tiff_dither.core.reader import decode_tiff
    from tiff_dither.core.report import ConsoleDiagnostics

    is_json = args.json
    input_path, data = _load(args.input, is_json)

    if not is_json:
        from rich.console import Console

        try:
            decode_tiff(data, ConsoleDiagnostics(Console()))
        except TiffDecodeError as e:
            _fail(str(e), e.code, is_json)
        return

    try:
        decoded = decode_tiff(data)
    except TiffDecodeError as e:
        _fail(str(e), e.code, is_json)

    d = decoded.descriptor
    result = {
        "status": "success",
        "input": str(input_path),
        "byte_order": decoded.endianness.value,
        "ifd_offset": decoded.header.ifd_offset,
        "entries": [
            {
                "tag": e.tag_id,
                "type": e.field_type,
                "count": e.count,
                "value_or_offset": e.value_or_offset,
                "inline": e.is_inline,
            }
            for e in decoded.entries
        ],
        "image": {
            "width": d.width,
            "height": d.height,
            "rows_per_strip": d.rows_per_strip,
            "strip_offset": d.strip_offset,
            "strip_byte_count": d.strip_byte_count,
            "samples_per_pixel": d.samples_per_pixel,
            "bits_per_sample": list(d.bits_per_sample),
            "compression": d.compression,
            "photometric": d.photometric,
        },
    }
    print(json.dumps(result, indent=2))


def main() -> None:
    """Main entry point.

    Routing:
      tiff-dither convert <file> [opts]  → headless conversion
      tiff-dither info <file>            → directory dump
      tiff-dither view <file>            → viewer
      tiff-dither <file>                 → viewer
    """
    from tiff_dither.utils.log import configure_logging

    raw_args = sys.argv[1:]
    # A bare file path goes straight to the viewer; argparse would take it
    # for an unknown subcommand.
    if raw_args and raw_args[0] not in ("convert", "info", "view") and not raw_args[0].startswith("-"):
        from tiff_dither.app import run_app
        run_app(input_path=raw_args[0])
        return

    parser = _build_parser()
    args = parser.parse_args(raw_args)
    configure_logging(verbose=getattr(args, "verbose", False))

    if args.command == "convert":
        _run_convert(args)
    elif args.command == "info":
        _run_info(args)
    elif args.command == "view":
        from tiff_dither.app import run_app
        run_app(input_path=args.input)
    else:
        parser.print_help()
        sys.exit(2)
