"""Command-line interface for quadrant chart conversion."""
from __future__ import annotations

import argparse
import json
import logging
import os
import sys
import traceback
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .converter import render
from .layout import LayoutConfig, LayoutConfigError, layout_chart
from .parser import parse
from .preview import render_png
from .resources import load_cheatsheet

DEFAULT_OUTPUT = "chart.drawio"
DEFAULT_PREVIEW_OUTPUT = "chart.png"
SUBCOMMANDS_HINT = "Use one of: convert, preview, cheatsheet."

logger = logging.getLogger("quadrant2drawio")


@dataclass
class CliError(Exception):
    code: str
    message: str
    hint: Optional[str] = None
    exit_code: int = 1
    file: Optional[str] = None


class UsageError(Exception):
    pass


class FriendlyArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # pragma: no cover - argparse callback
        raise UsageError(message)


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--canvas-size", type=float, default=LayoutConfig.canvas_size)
    parser.add_argument("--padding", type=float, default=LayoutConfig.padding)


def _build_parser() -> argparse.ArgumentParser:
    parser = FriendlyArgumentParser(
        prog="quadrant2drawio",
        description="Convert Mermaid quadrant charts to draw.io XML.",
    )
    parser.add_argument("--error-format", choices=["text", "json"], default="text")
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--verbose", action="store_true", help="Log skipped source lines to stderr")

    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser("convert", help="Convert a quadrant chart to .drawio")
    convert_parser.add_argument("input", nargs="?", help="Input .mmd file")
    convert_parser.add_argument("--text", help="Raw quadrantChart source")
    convert_parser.add_argument("--stdout", action="store_true", help="Write XML to stdout")
    convert_parser.add_argument("-o", "--output", help=f"Output path (default: {DEFAULT_OUTPUT})")
    _add_layout_arguments(convert_parser)

    preview_parser = subparsers.add_parser("preview", help="Render a quadrant chart to PNG")
    preview_parser.add_argument("input", nargs="?", help="Input .mmd file")
    preview_parser.add_argument("--text", help="Raw quadrantChart source")
    preview_parser.add_argument("--stdout", action="store_true", help="Write PNG bytes to stdout")
    preview_parser.add_argument("-o", "--output", help="Output .png path")
    preview_parser.add_argument("--scale", type=float, default=1.0)
    _add_layout_arguments(preview_parser)

    subparsers.add_parser("cheatsheet", help="Print quadrantChart notation reference")

    return parser


def _read_input(path: Optional[str], text: Optional[str]) -> tuple[str, Optional[Path]]:
    if path and text is not None:
        raise CliError(
            "E_ARGS",
            "--text cannot be combined with file input",
            hint="Use either FILE or --text.",
            exit_code=2,
        )

    if text is not None:
        return text, None

    if path:
        input_path = Path(path)
        if not input_path.exists():
            raise CliError(
                "E_IO_READ",
                f"input file not found: {input_path}",
                exit_code=2,
                file=str(input_path),
            )
        try:
            return input_path.read_text(encoding="utf-8"), input_path
        except OSError as exc:
            raise CliError(
                "E_IO_READ",
                f"failed to read input file: {input_path}",
                hint=str(exc),
                exit_code=2,
                file=str(input_path),
            )

    if sys.stdin.isatty():
        raise CliError(
            "E_ARGS",
            "no input provided",
            hint="Pass an input FILE, --text, or pipe source on stdin.",
            exit_code=2,
        )
    return sys.stdin.read(), None


def _layout_config(args: argparse.Namespace) -> LayoutConfig:
    try:
        return LayoutConfig(canvas_size=args.canvas_size, padding=args.padding).validate()
    except LayoutConfigError as exc:
        raise CliError(
            "E_CONFIG",
            str(exc),
            hint="Use a positive --canvas-size and a non-negative --padding.",
            exit_code=2,
        )


def _check_output_flags(args: argparse.Namespace) -> None:
    if args.stdout and args.output:
        raise CliError(
            "E_ARGS",
            "--stdout and --output are mutually exclusive",
            hint="Choose either --stdout or --output.",
            exit_code=2,
        )


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CliError(
            "E_IO_WRITE",
            f"failed to write output file: {path}",
            hint=str(exc),
            exit_code=4,
            file=str(path),
        )


def _write_bytes(path: Path, content: bytes) -> None:
    try:
        path.write_bytes(content)
    except OSError as exc:
        raise CliError(
            "E_IO_WRITE",
            f"failed to write output file: {path}",
            hint=str(exc),
            exit_code=4,
            file=str(path),
        )


def _error_from_exception(exc: Exception) -> CliError:
    if isinstance(exc, CliError):
        return exc
    if isinstance(exc, LayoutConfigError):
        return CliError("E_CONFIG", str(exc), exit_code=2)
    return CliError(
        "E_INTERNAL",
        str(exc) or exc.__class__.__name__,
        hint="Re-run with --debug to see traceback.",
        exit_code=1,
    )


def _emit_error(err: CliError, *, error_format: str) -> None:
    if error_format == "json":
        payload = {
            "ok": False,
            "code": err.code,
            "message": err.message,
            "file": err.file,
            "hint": err.hint,
        }
        sys.stderr.write(json.dumps(payload) + "\n")
        return

    sys.stderr.write(f"error[{err.code}]: {err.message}\n")
    if err.hint:
        sys.stderr.write(f"hint: {err.hint}\n")


def _handle_convert(args: argparse.Namespace) -> int:
    _check_output_flags(args)
    config = _layout_config(args)
    source, _source_path = _read_input(args.input, args.text)
    model = parse(source)
    xml_text = render(model, config)

    if args.stdout:
        sys.stdout.write(xml_text)
        return 0

    output_path = Path(args.output or DEFAULT_OUTPUT)
    print(f"Found {len(model.points)} data points.")
    _write_text(output_path, xml_text)
    print(f"Wrote {output_path}")
    return 0


def _handle_preview(args: argparse.Namespace) -> int:
    _check_output_flags(args)
    if args.scale <= 0:
        raise CliError(
            "E_ARGS",
            "--scale must be > 0",
            hint="Use a positive scale factor like 1 or 2.",
            exit_code=2,
        )
    config = _layout_config(args)
    source, source_path = _read_input(args.input, args.text)
    model = parse(source)
    png_bytes = render_png(layout_chart(model, config), config, scale=args.scale)

    if args.stdout:
        sys.stdout.buffer.write(png_bytes)
        return 0

    if args.output:
        output_path = Path(args.output)
    elif source_path is not None:
        output_path = source_path.with_suffix(".png")
    else:
        output_path = Path(DEFAULT_PREVIEW_OUTPUT)
    print(f"Found {len(model.points)} data points.")
    _write_bytes(output_path, png_bytes)
    print(f"Wrote {output_path}")
    return 0


def _attach_log_handler(verbose: bool) -> Optional[logging.Handler]:
    if not verbose:
        return None
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def main(argv: Optional[Iterable[str]] = None) -> int:
    raw_argv = list(argv) if argv is not None else sys.argv[1:]
    parser = _build_parser()

    if not raw_argv:
        err = CliError("E_ARGS", "missing subcommand", hint=SUBCOMMANDS_HINT, exit_code=2)
        _emit_error(err, error_format="text")
        return err.exit_code

    debug_enabled = "--debug" in raw_argv or os.getenv("QUADRANT2DRAWIO_DEBUG") == "1"
    error_format = "text"
    if "--error-format" in raw_argv:
        idx = raw_argv.index("--error-format")
        if idx + 1 < len(raw_argv):
            error_format = raw_argv[idx + 1]

    handler: Optional[logging.Handler] = None
    try:
        args = parser.parse_args(raw_argv)
        error_format = args.error_format
        handler = _attach_log_handler(args.verbose)

        if args.command == "convert":
            return _handle_convert(args)
        if args.command == "preview":
            return _handle_preview(args)
        if args.command == "cheatsheet":
            print(load_cheatsheet())
            return 0

        raise CliError("E_ARGS", "missing subcommand", hint=SUBCOMMANDS_HINT, exit_code=2)
    except UsageError as exc:
        err = CliError("E_ARGS", str(exc), hint=SUBCOMMANDS_HINT, exit_code=2)
        _emit_error(err, error_format=error_format)
        return err.exit_code
    except Exception as exc:  # pragma: no cover - exercised in integration tests
        err = _error_from_exception(exc)
        _emit_error(err, error_format=error_format)
        if debug_enabled:
            traceback.print_exc(file=sys.stderr)
        return err.exit_code
    finally:
        if handler is not None:
            logger.removeHandler(handler)
            logger.setLevel(logging.NOTSET)


if __name__ == "__main__":
    raise SystemExit(main())
