#!/usr/bin/env python3
# Copyright 2026 TIER IV, inc.
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

"""CLI entry point for checking env files against schemas."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, List, Mapping

from ..core import create_env, create_split_env
from ..exceptions import EnvGateError
from ..schema import load_schema_file
from ..source import get_default_env_source, load_env_file
from ..template import render_env_example, write_env_example
from ..utils.logging_utils import LOG_LEVEL_CHOICES, configure_split_stream_logging
from .report import REPORT_FORMATS, CheckReport


logger = logging.getLogger(__name__)

PROCESS_ENV_LABEL = "<process environment>"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="envgate",
        description="Validate environment variables against a JSON Schema (JSON or YAML)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check = subparsers.add_parser("check", help="Validate an env file or the process environment")
    check.add_argument("--schema", help="Schema file for a single validation")
    check.add_argument("--server-schema", help="Server schema file (split mode)")
    check.add_argument("--client-schema", help="Client schema file (split mode)")
    check.add_argument("--client-prefix", help="Prefix of client-visible variables, e.g. PUBLIC_")
    check.add_argument("--env-file", help="Env file to check (default: process environment)")
    check.add_argument(
        "--strict",
        action="store_true",
        help="Reject variables the schema does not declare. The process environment "
        "always carries unrelated variables, so use this with --env-file.",
    )
    check.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default="human",
        help="Output format (default: human)",
    )

    example = subparsers.add_parser("example", help="Generate a .env.example file from a schema")
    example.add_argument("--schema", required=True, help="Schema file")
    example.add_argument("-o", "--output", help="Output path (default: stdout)")

    return parser


def _declared_keys(*schemas: Any) -> set:
    keys = set()
    for schema in schemas:
        keys.update(schema.field_names)
    return keys


def _run_check(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    split_mode = bool(args.server_schema or args.client_schema)
    if split_mode and args.schema:
        parser.error("--schema cannot be combined with --server-schema/--client-schema")
    if split_mode and not (args.server_schema and args.client_schema and args.client_prefix):
        parser.error("split mode needs --server-schema, --client-schema and --client-prefix")
    if not split_mode and not args.schema:
        parser.error("one of --schema or --server-schema/--client-schema is required")

    if args.env_file:
        source: Mapping[str, Any] = load_env_file(args.env_file)
        report = CheckReport(str(args.env_file))
    else:
        source = get_default_env_source()
        report = CheckReport(PROCESS_ENV_LABEL)

    def _report_and_exit(issues) -> None:
        report.add_issues(issues)
        print(report.render(args.format))
        sys.exit(1)

    if split_mode:
        server = load_schema_file(args.server_schema)
        client = load_schema_file(args.client_schema)
        if not args.strict:
            declared = _declared_keys(server, client)
            source = {key: value for key, value in source.items() if key in declared}
        env = create_split_env(
            server=server,
            client=client,
            runtime_env=source,
            client_prefix=args.client_prefix,
            on_error=_report_and_exit,
        )
    else:
        env = create_env(
            load_schema_file(args.schema),
            env_source=source,
            strict=args.strict,
            client_prefix=args.client_prefix,
            on_error=_report_and_exit,
        )

    report.variable_count = len(env) if isinstance(env, Mapping) else 1
    output = report.render(args.format)
    if output:
        print(output)


def _run_example(args: argparse.Namespace) -> None:
    schema = load_schema_file(args.schema)
    source_name = Path(args.schema).name
    if args.output:
        write_env_example(schema, args.output, source_name=source_name)
        logger.info("Wrote %s", args.output)
    else:
        sys.stdout.write(render_env_example(schema, source_name=source_name))


def main(argv: List[str] | None = None) -> None:
    """Main entry point for the envgate CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_split_stream_logging(level=args.log_level)

    try:
        if args.command == "check":
            _run_check(args, parser)
        else:
            _run_example(args)
    except EnvGateError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    sys.exit(0)


if __name__ == "__main__":
    main()
