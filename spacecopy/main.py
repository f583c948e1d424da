"""Composition root for spacecopy.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Run mode selection (apply, destroy, show, list)
"""

import asyncio
import json
import logging
import sys
from typing import Any

from spacecopy.adapters.cli.commands import CLICommandHandler
from spacecopy.adapters.kibana.spaces import KibanaSpacesAdapter
from spacecopy.adapters.state.json_file import JsonFileStateStore
from spacecopy.config import Settings, load_settings
from spacecopy.core.copy_adapter import CopyAdapter
from spacecopy.core.reconciler import Reconciler


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so command results on stdout stay parseable
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


async def run(settings: Settings, kibana: KibanaSpacesAdapter) -> dict[str, Any]:
    """Wire core services around ``kibana`` and execute the run mode.

    Returns:
        Command result dictionary.
    """
    store = JsonFileStateStore(state_path=settings.state_path)
    copy_adapter = CopyAdapter(client=kibana)
    reconciler = Reconciler(lifecycle=copy_adapter, store=store)
    cli_handler = CLICommandHandler(reconciler)

    if settings.run_mode == "apply":
        return await cli_handler.apply(
            settings.declaration_path, force_update=settings.force_update
        )
    if settings.run_mode == "destroy":
        return await cli_handler.destroy(settings.resource_name)
    if settings.run_mode == "show":
        return await cli_handler.show(settings.resource_name)
    return await cli_handler.list_resources()


async def bootstrap() -> int:
    """Load configuration, wire adapters, and run the selected command.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters with configuration
    4. Run the command and print its result as JSON

    Returns:
        Process exit code: 0 on success, 1 if the command failed.
    """
    settings = load_settings()

    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting spacecopy in {settings.run_mode} mode...")

    kibana = KibanaSpacesAdapter(
        api_url=settings.kibana_url,
        username=settings.kibana_username,
        password=settings.kibana_password,
        api_key=settings.kibana_api_key,
        timeout=settings.kibana_timeout_seconds,
        verify=settings.kibana_verify_tls,
    )
    try:
        result = await run(settings, kibana)
    finally:
        await kibana.close()

    print(json.dumps(result, indent=2, default=str))
    return 0 if result.get("status") == "success" else 1


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Command succeeded
        1: Command failed or fatal error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        exit_code = asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
