"""bucketfs CLI - operate on a configured file system from the shell.

Usage:
    python -m bucketfs [--config FILE | --env-prefix PREFIX] [-v] <command> PATH

Commands:
    exists PATH         Check whether a file exists
    dir-exists PATH     Check whether a directory exists
    cat PATH            Write file bytes to stdout
    put PATH            Write stdin (or --input FILE) to a file
    rm PATH             Delete a file
    mkdir PATH          Create a directory marker
    rmdir PATH          Delete a directory and everything under it

Configuration comes from a YAML file (--config) or from BUCKETFS_*
environment variables (see bucketfs.s3.config for option names).

Exit codes:
    0: Success / probe returned true
    1: Probe returned false / operation failed
    2: Configuration error
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from bucketfs.filesystem.base import FileSystem
from bucketfs.filesystem.config import DEFAULT_ENV_PREFIX
from bucketfs.filesystem.errors import FileSystemConfigError, FileSystemError
from bucketfs.filesystem.models import BinaryContent
from bucketfs.registry import default_registry

logger = logging.getLogger(__name__)


def _output_json(data: dict[str, Any]) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _make_error_result(code: str, message: str) -> dict[str, Any]:
    return {"error": {"code": code, "message": message}, "ok": False}


def open_filesystem(args: argparse.Namespace) -> FileSystem:
    """Build the file system selected by the global CLI options.

    Raises:
        FileSystemConfigError: If the configuration is missing or invalid.
    """
    registry = default_registry()
    if args.config:
        return registry.open_from_file(args.config)
    return registry.open_from_env(args.env_prefix)


def _read_input(input_path: str | None) -> bytes:
    if input_path:
        with open(input_path, "rb") as f:
            return f.read()
    return sys.stdin.buffer.read()


def cmd_exists(fs: FileSystem, args: argparse.Namespace) -> int:
    exists = fs.is_file_exist(args.path)
    _output_json({"exists": exists, "path": args.path})
    return 0 if exists else 1


def cmd_dir_exists(fs: FileSystem, args: argparse.Namespace) -> int:
    exists = fs.is_directory_exist(args.path)
    _output_json({"exists": exists, "path": args.path})
    return 0 if exists else 1


def cmd_cat(fs: FileSystem, args: argparse.Namespace) -> int:
    content = fs.read_file(args.path)
    sys.stdout.flush()
    sys.stdout.buffer.write(content.data)
    sys.stdout.buffer.flush()
    return 0


def cmd_put(fs: FileSystem, args: argparse.Namespace) -> int:
    try:
        data = _read_input(args.input)
    except OSError as e:
        _output_json(_make_error_result("INPUT_ERROR", f"Cannot read input: {e}"))
        return 1

    fs.write_file(args.path, BinaryContent(data=data, mime_type=args.content_type))
    _output_json({"ok": True, "path": args.path, "size_bytes": len(data)})
    return 0


def cmd_rm(fs: FileSystem, args: argparse.Namespace) -> int:
    deleted = fs.delete_file(args.path)
    _output_json({"deleted": deleted, "path": args.path})
    return 0 if deleted else 1


def cmd_mkdir(fs: FileSystem, args: argparse.Namespace) -> int:
    created = fs.create_directory(args.path)
    _output_json({"created": created, "path": args.path})
    return 0 if created else 1


def cmd_rmdir(fs: FileSystem, args: argparse.Namespace) -> int:
    deleted = fs.delete_directory(args.path)
    _output_json({"deleted": deleted, "path": args.path})
    return 0 if deleted else 1


COMMAND_DISPATCH = {
    "exists": cmd_exists,
    "dir-exists": cmd_dir_exists,
    "cat": cmd_cat,
    "put": cmd_put,
    "rm": cmd_rm,
    "mkdir": cmd_mkdir,
    "rmdir": cmd_rmdir,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="bucketfs",
        description="File-system operations over S3-compatible storage",
    )
    parser.add_argument("--config", help="YAML configuration file (default: environment)")
    parser.add_argument(
        "--env-prefix",
        default=DEFAULT_ENV_PREFIX,
        help=f"Environment variable prefix (default: {DEFAULT_ENV_PREFIX})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command")

    for name, help_text in (
        ("exists", "Check whether a file exists"),
        ("dir-exists", "Check whether a directory exists"),
        ("cat", "Write file bytes to stdout"),
        ("rm", "Delete a file"),
        ("mkdir", "Create a directory"),
        ("rmdir", "Delete a directory recursively"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("path")

    put = subparsers.add_parser("put", help="Write stdin or a local file to a file")
    put.add_argument("path")
    put.add_argument("--input", help="Local file to upload (default: stdin)")
    put.add_argument("--content-type", help="MIME type (default: sniffed)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success / probe returned true
        1: Probe returned false / operation failed
        2: Configuration error
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    try:
        fs = open_filesystem(args)
    except FileSystemConfigError as e:
        _output_json(_make_error_result("CONFIG_ERROR", str(e)))
        return 2

    try:
        return COMMAND_DISPATCH[args.command](fs, args)
    except FileSystemConfigError as e:
        _output_json(_make_error_result("CONFIG_ERROR", str(e)))
        return 2
    except FileSystemError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        _output_json(_make_error_result(type(e).__name__, str(e)))
        return 1


if __name__ == "__main__":
    sys.exit(main())
