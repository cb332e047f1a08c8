#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
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

"""CLI entry point for checking content documents against their schemas."""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ..config import ValidatorConfig
from ..file_io.source_location import SourceLocation, format_source
from ..samples import sample_registry
from . import CheckResult, check_files

DOCUMENT_EXTENSIONS = ('.yaml', '.yml', '.json')


def find_document_files(paths: List[str]) -> List[Path]:
    """Find all YAML/JSON document files in given paths."""
    document_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.suffix in DOCUMENT_EXTENSIONS:
                document_files.append(path)
            else:
                print(f"Warning: File is not a YAML or JSON document: {path}", file=sys.stderr)
        elif path.is_dir():
            for ext in DOCUMENT_EXTENSIONS:
                document_files.extend(path.rglob(f'*{ext}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(document_files))


def _print_human(results: List[CheckResult]) -> None:
    for result in results:
        if not (result.errors or result.warnings):
            continue
        print(f"\n{result.file_path}:")
        for label, entries in (('ERROR', result.errors), ('WARNING', result.warnings)):
            for entry in entries:
                loc = format_source(SourceLocation(line=entry.get('line'), column=entry.get('column')))
                line_info = f":{loc}" if loc else ""
                where = f" [{entry['pointer']}]" if entry.get('pointer') else ""
                print(f"  {label}{line_info}{where}: {entry['message']}")


def _print_json(results: List[CheckResult]) -> None:
    output = {
        'files': len(results),
        'errors': sum(len(r.errors) for r in results),
        'warnings': sum(len(r.warnings) for r in results),
        'results': [
            {
                'file': str(r.file_path),
                'schema': r.schema_name,
                'errors': r.errors,
                'warnings': r.warnings,
            }
            for r in results
        ],
    }
    print(json.dumps(output, indent=2))


def _print_github_actions(results: List[CheckResult]) -> None:
    for result in results:
        for error in result.errors:
            print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
        for warning in result.warnings:
            print(f"::warning file={result.file_path},line={warning.get('line', 1)}::{warning['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the document checker CLI."""
    parser = argparse.ArgumentParser(
        description='Validate content documents (YAML or JSON) against their schemas',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Document files or directories (default: current directory)',
    )
    parser.add_argument(
        '--schema',
        default=None,
        help="Document type to validate against (default: the document's '_type')",
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--strict',
        action='store_true',
        help='Treat warnings as failures',
    )

    args = parser.parse_args(argv)

    config = ValidatorConfig.from_env()
    config.set_logging()
    strict = args.strict or config.strict

    if not args.paths:
        args.paths = ['.']

    registry = sample_registry()
    if args.schema is not None and args.schema not in registry:
        print(f"Unknown document type '{args.schema}'. Valid types: {registry.names()}", file=sys.stderr)
        sys.exit(2)

    document_files = find_document_files(args.paths)
    if not document_files:
        print("No document files found.", file=sys.stderr)
        sys.exit(2)

    results = check_files(
        document_files,
        registry,
        validator=config.make_validator(registry.field_types),
        schema_name=args.schema,
    )

    if args.format == 'json':
        _print_json(results)
    elif args.format == 'github-actions':
        _print_github_actions(results)
    else:
        _print_human(results)

    if any(r.failed(strict) for r in results):
        sys.exit(1)
    if args.format == 'human':
        print("All documents passed validation.")
    sys.exit(0)


if __name__ == '__main__':
    main()
