"""Main module entrypoint for local runtime execution.

`api` starts the FastAPI service; `analytics-report` prints one assembly's
registration report as JSON.
"""

import argparse
import json
import sys

import uvicorn

from app.api.serialization import api_serialize_registration_report
from app.bootstrap import bootstrap_create_analytics_service, bootstrap_create_application
from app.config import AppSettings, config_load_settings


def main_run_analytics_report(assembly_id: str, settings: AppSettings) -> int:
    """Print one registration report as JSON on stdout.

    Failures are written to stderr so stdout only ever carries the report.

    Args:
        assembly_id: Assembly identifier.
        settings: Validated runtime settings.

    Returns:
        int: Process exit code, 0 on success and 1 when the report cannot be computed.
    """

    analytics_service, engine = bootstrap_create_analytics_service(settings=settings)
    try:
        report = analytics_service.analytics_compute_registration_report(assembly_id)
    except (ValueError, RuntimeError) as error:
        print(f"ANALYTICS_REPORT_FAILED: {error}", file=sys.stderr)
        return 1
    finally:
        engine.dispose()
    print(json.dumps(api_serialize_registration_report(report), ensure_ascii=False, indent=2))
    return 0


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when the report cannot be computed.
    """

    argument_parser = argparse.ArgumentParser(description="Assembly registration admin runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "analytics-report"),
        help="Runtime command: `api` starts server, `analytics-report` prints one registration report",
        type=str,
    )
    argument_parser.add_argument(
        "--assembly-id",
        dest="assembly_id",
        type=str,
        help="Assembly identifier for `analytics-report`",
    )
    parsed_arguments = argument_parser.parse_args()
    settings = config_load_settings()

    if parsed_arguments.command == "analytics-report":
        if not parsed_arguments.assembly_id:
            argument_parser.error("--assembly-id is required for analytics-report")
        exit_code = main_run_analytics_report(parsed_arguments.assembly_id, settings)
        if exit_code != 0:
            raise SystemExit(exit_code)
        return

    application = bootstrap_create_application(settings=settings)
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


if __name__ == "__main__":
    main()
