"""Composition root for the CGU admissions portal.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here, creating a clear entry point for the application.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Core service initialization
- Dependency injection
- Interactive CLI loop
"""

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any

from admissions.adapters.cli.commands import CLICommandHandler, run_command
from admissions.adapters.store.json_file import JsonFileKeyValueStore
from admissions.adapters.store.memory import InMemoryKeyValueStore
from admissions.adapters.store.sqlite import SQLiteKeyValueStore
from admissions.config import Settings, load_settings
from admissions.core.accounts import AccountDirectory
from admissions.core.applications import ApplicationRegistry
from admissions.core.gate import AuthorizationGate
from admissions.core.ports import KeyValueStorePort


@dataclass
class Portal:
    """The wired set of portal services."""

    directory: AccountDirectory
    gate: AuthorizationGate
    registry: ApplicationRegistry
    cli: CLICommandHandler


def _build_store(settings: Settings) -> KeyValueStorePort:
    """Instantiate the durable store selected by configuration."""
    if settings.store_backend == "memory":
        return InMemoryKeyValueStore()
    if settings.store_backend == "json_file":
        return JsonFileKeyValueStore(path=settings.store_json_path)
    if settings.store_backend == "sqlite":
        return SQLiteKeyValueStore(db_path=settings.store_sqlite_path)
    raise ValueError(f"Unknown store backend: {settings.store_backend}")


def build_portal(
    settings: Settings,
    store: KeyValueStorePort | None = None,
    session: KeyValueStorePort | None = None,
) -> Portal:
    """Wire adapters and core services.

    Args:
        settings: Loaded configuration.
        store: Durable store override; built from settings when None.
        session: Session store override; a fresh in-memory store when None.

    Returns:
        Portal with every service wired to the same stores.
    """
    logger = logging.getLogger(__name__)

    if store is None:
        store = _build_store(settings)
    logger.info(f"Durable store: {settings.store_backend}")

    # The session lives exactly as long as this process.
    if session is None:
        session = InMemoryKeyValueStore()

    directory = AccountDirectory(store=store, session=session)
    gate = AuthorizationGate(directory)
    registry = ApplicationRegistry(store=store, gate=gate)
    cli = CLICommandHandler(gate=gate, registry=registry)

    return Portal(directory=directory, gate=gate, registry=registry, cli=cli)


def _run_cli_interactive(handler: CLICommandHandler) -> None:
    """Run interactive CLI loop.

    Provides a REPL-like interface for portal commands.

    Args:
        handler: CLICommandHandler instance for executing commands.
    """
    logger = logging.getLogger(__name__)
    print("CGU Admissions Portal. Type 'help' for available commands or 'exit' to quit.")

    while True:
        try:
            command_line = input("admissions> ").strip()

            if not command_line:
                continue

            if command_line.lower() == "exit":
                logger.info("Exiting CLI")
                break

            if command_line.lower() == "help":
                _print_cli_help()
                continue

            # Parse command and arguments
            parts = command_line.split(maxsplit=1)
            command = parts[0].lower()
            args_str = parts[1] if len(parts) > 1 else ""

            # Try to parse arguments as JSON
            try:
                args: Any = json.loads(args_str) if args_str else {}
            except json.JSONDecodeError:
                print("Invalid JSON arguments. Use 'help' for command syntax.")
                continue
            if not isinstance(args, dict):
                print("Arguments must be a JSON object. Use 'help' for command syntax.")
                continue

            # Execute command
            try:
                result = run_command(handler, command, args)
            except ValueError as e:
                result = {"status": "error", "message": str(e)}

            if isinstance(result.get("data"), str):
                print(result["data"])
            else:
                print(json.dumps(result, indent=2, default=str))

        except EOFError:
            # Ctrl+D to exit
            logger.info("EOF received, exiting CLI")
            break
        except KeyboardInterrupt:
            # Ctrl+C
            print()
            continue


def _print_cli_help() -> None:
    """Print CLI help message."""
    help_text = """
Available Commands (JSON format):

  register
    Create an applicant account and log in.
    Required: name, email, password
    Optional: phone

    Example: register {"name": "Asha Rao", "email": "asha@example.com", "password": "s3cret"}

  login
    Required: email, password

    Example: login {"email": "admin@cgu.edu", "password": "admin123"}

  logout / whoami
    End the session / show the logged-in user.

  programs
    List the programs open for application.

  submit
    Submit an application for the logged-in applicant.
    Required: fullName, email, phone, address, dateOfBirth, program,
              previousEducation (list of {institution, degree, gradYear, percentage})
    Optional: documentUrls (list of {name, url}), statement

  my_application
    Show your application and its status.
    Optional: format ("json" or "text")

  list (admin)
    List applications.
    Optional: status (ALL, UNDER_REVIEW, ACCEPTED, REJECTED), search, format

    Example: list {"status": "UNDER_REVIEW", "search": "asha", "format": "text"}

  summary (admin)
    Count applications by status.

  details
    Show one application (admins, or the owning applicant).
    Required: application_id

  update_status (admin)
    Required: application_id, status

    Example: update_status {"application_id": "app-...", "status": "ACCEPTED"}

  help
    Show this help message.

  exit
    Exit the CLI.

Note: All commands accept arguments as a single JSON object.
Provide the JSON after the command name on the same line.
    """
    print(help_text)


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Logs go to stderr so they never interleave with command output.
    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def main() -> None:
    """Application entry point.

    Loads configuration, wires adapters, initializes core services,
    and starts the interactive CLI.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        settings = load_settings()
        configure_logging(
            "DEBUG" if settings.debug else settings.log_level, settings.log_format
        )
        portal = build_portal(settings)
        _run_cli_interactive(portal.cli)
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
