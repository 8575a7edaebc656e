"""Main module entrypoint for local runtime execution.

The `api` command validates startup configuration and launches the FastAPI
service; `validate` checks one local file and prints its error-only report.
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

import uvicorn

from statement_validator.adapters import RecordParseError, UnsupportedFileTypeError
from statement_validator.api.routers import api_serialize_file_validation_result
from statement_validator.bootstrap import bootstrap_create_application
from statement_validator.config import AppSettings, config_load_settings
from statement_validator.jobs import job_resolve_file_format, job_validate_file
from statement_validator.logging_setup import logging_configure
from statement_validator.reporting import report_render_table

EXIT_CODE_VALID = 0
EXIT_CODE_ERROR_RECORDS = 1
EXIT_CODE_REJECTED = 2


def main(argv: Sequence[str] | None = None) -> int:
    """Run selected runtime command with validated startup configuration.

    Args:
        argv: Optional argument vector; defaults to process arguments.

    Returns:
        int: Process exit code.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Statement record validator runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "validate"),
        help="Runtime command: `api` starts server, `validate` checks one CSV or XML file",
        type=str,
    )
    argument_parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="File to check for `validate`",
    )
    argument_parser.add_argument(
        "--format",
        dest="output_format",
        default="table",
        choices=("table", "json"),
        help="Report output format for `validate`",
    )
    parsed_arguments = argument_parser.parse_args(argv)

    settings = config_load_settings()

    if parsed_arguments.command == "validate":
        if parsed_arguments.path is None:
            argument_parser.error("`validate` requires a file path")
        logging_configure(level=settings.log_level)
        return main_validate_file(
            file_path=parsed_arguments.path,
            settings=settings,
            output_format=parsed_arguments.output_format,
        )

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )
    return EXIT_CODE_VALID


def main_validate_file(file_path: Path, settings: AppSettings, output_format: str = "table") -> int:
    """Validate one local file and print its report to stdout.

    Args:
        file_path: Path of the CSV or XML file.
        settings: Runtime settings supplying the text encoding.
        output_format: `table` or `json`.

    Returns:
        int: 0 for an empty report, 1 when error records exist, 2 when the file is rejected.
    """

    try:
        job_resolve_file_format(file_path.name)
        payload_bytes = file_path.read_bytes()
        validation_result = job_validate_file(file_path.name, payload_bytes, settings.upload_text_encoding)
    except UnsupportedFileTypeError as error:
        print(str(error), file=sys.stderr)
        return EXIT_CODE_REJECTED
    except RecordParseError as error:
        print(f"An error occurred during file parsing: {error}", file=sys.stderr)
        return EXIT_CODE_REJECTED
    except OSError as error:
        print(f"File {file_path} could not be read: {error.strerror}", file=sys.stderr)
        return EXIT_CODE_REJECTED

    report = validation_result.report
    if output_format == "json":
        print(json.dumps(api_serialize_file_validation_result(validation_result), indent=2))
    else:
        print(report_render_table(report.error_records))

    if report.report_is_valid():
        return EXIT_CODE_VALID
    return EXIT_CODE_ERROR_RECORDS


if __name__ == "__main__":
    raise SystemExit(main())
