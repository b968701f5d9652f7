# Copyright 2025 Lars Marowsky-Brée <lars@marowsky-bree.eu>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for redact-env."""

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .config import get_config_path, load_catalog, validate_config_file
from .hooks import run_hook
from .installer import install, uninstall
from .path_matcher import is_sensitive_path
from .redactor import redact

DESCRIPTION = """\
Automatic secret redaction for Claude Code.

When installed, Read and Bash tool calls on sensitive files are redirected to
a redacted copy:
  - .env files (.env, .env.local, .env.production, ...)
  - private keys (*.pem, *.key)
  - credential files (credentials.json, secrets.yaml, ...)
  - other auth files (.netrc, .pgpass)
"""


def cmd_hook(args: argparse.Namespace) -> int:
    """Run as Claude Code hook."""
    return run_hook()


def cmd_install(args: argparse.Namespace) -> int:
    """Register the hook in Claude Code settings."""
    install(Path(args.settings) if args.settings else None)
    print("Fully quit and restart Claude Code.", file=sys.stderr)
    return 0


def cmd_uninstall(args: argparse.Namespace) -> int:
    """Remove the hook from Claude Code settings."""
    if not uninstall(Path(args.settings) if args.settings else None):
        print("Hook not configured", file=sys.stderr)
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Run the redactor over files and report findings."""
    catalog = load_catalog()
    any_error = False

    for file_arg in args.files:
        path = Path(file_arg)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: {file_arg}: {e}", file=sys.stderr)
            any_error = True
            continue

        result = redact(content, file_arg, catalog)
        sensitive = " (sensitive path)" if is_sensitive_path(file_arg, catalog) else ""
        print(f"{file_arg}{sensitive}: {len(result.findings)} finding(s)")
        for finding in result.findings:
            print(f"  {finding}")
        if args.diff and result.findings:
            print(result.redacted_text)

    return 1 if any_error else 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate config file syntax."""
    path = Path(args.config) if args.config else get_config_path(global_=args.glob)
    errors = validate_config_file(path)
    if errors:
        print(f"Validation errors in {path}:", file=sys.stderr)
        for err in errors:
            print(f"  {err}", file=sys.stderr)
        return 1
    print(f"{path}: OK")
    return 0


def main() -> int | NoReturn:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="redact-env",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("hook", help="Run as Claude Code hook (reads JSON from stdin)")

    install_parser = subparsers.add_parser("install", help="Install hooks into Claude Code")
    install_parser.add_argument("--settings", help="Settings file (default ~/.claude/settings.json)")

    uninstall_parser = subparsers.add_parser("uninstall", help="Remove hooks from Claude Code")
    uninstall_parser.add_argument("--settings", help="Settings file (default ~/.claude/settings.json)")

    check_parser = subparsers.add_parser("check", help="Show what would be redacted in files")
    check_parser.add_argument("files", nargs="+", help="Files to scan")
    check_parser.add_argument("--diff", action="store_true", help="Print redacted content")

    validate_parser = subparsers.add_parser("validate", help="Validate config file syntax")
    validate_parser.add_argument("--global", dest="glob", action="store_true", help="Global config")
    validate_parser.add_argument("--config", help="Custom config file")

    subparsers.add_parser("help", help="Show this help message")

    args = parser.parse_args()

    if args.command == "hook":
        return cmd_hook(args)
    if args.command == "install":
        return cmd_install(args)
    if args.command == "uninstall":
        return cmd_uninstall(args)
    if args.command == "check":
        return cmd_check(args)
    if args.command == "validate":
        return cmd_validate(args)

    parser.print_help()
    return 0

