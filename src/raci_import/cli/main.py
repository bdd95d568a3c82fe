from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable
from contextlib import closing
from pathlib import Path
from typing import Any

import psycopg2
from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..db.commit import CommitError
from ..logging.init import log_summary, setup_logging
from ..models.config_models import ImportConfig
from ..services.classifier import KIND_EMPLOYEES, KIND_PROJECTS, preview_messages
from ..services.orchestrator import ImportRun, ProcessingError, bootstrap_manager, run_import
from ..services.summary import render_outcome_line, render_summary_line

"""CLI entrypoint.

raci-import {employees,projects} FILE [--config PATH] [--accept-warnings]
                                      [--dry-run] [--skip-header] [--debug]
raci-import bootstrap-manager NAME --department DEPT --position POS
                                   [--config PATH] [--dry-run] [--debug]

Exit codes:
- 0: validated (and committed when connected) without blocking issues
- 1: fatal (config, unreadable file, database rejected the commit)
- 2: import blocked (error rows, or warnings not accepted), or the
     bootstrap manager failed validation
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_BLOCKED = 2

BOOTSTRAP_MANAGER = "bootstrap-manager"


def resolve_dsn(cfg: ImportConfig) -> str:
    """Connection string; environment variables win over config values.

    1. DATABASE_URL / PGDSN (whole DSN), then config database.dsn
    2. PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE, falling back to
       the config database section field by field
    """
    db_cfg = cfg.database
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values take precedence over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    common.add_argument("--dry-run", action="store_true", help="Validate only, never commit")
    common.add_argument("--debug", action="store_true", help="Enable debug logging")

    p = argparse.ArgumentParser(prog="raci-import", description="Validate and import RACI reference data")
    sub = p.add_subparsers(dest="kind", required=True)
    for kind in (KIND_EMPLOYEES, KIND_PROJECTS):
        sp = sub.add_parser(kind, parents=[common], help=f"Import {kind} from a .csv or .xlsx file")
        sp.add_argument("file", type=Path, help=".csv or .xlsx file")
        sp.add_argument("--accept-warnings", action="store_true", help="Acknowledge all warnings and import")
        sp.add_argument("--skip-header", action="store_true", help="First non-blank row is a title row")

    bp = sub.add_parser(BOOTSTRAP_MANAGER, parents=[common], help="Create the first manager before any employee exists")
    bp.add_argument("name", help="Manager's full name")
    bp.add_argument("--department", required=True, help="Existing active department")
    bp.add_argument("--position", required=True, help="Existing active position with can_manage")
    return p.parse_args(argv)


def _with_cursor(cfg: ImportConfig, offline: bool, logger: logging.Logger, work: Callable[[Any], Any]) -> Any:
    """Run ``work(cursor)`` on a fresh connection, or ``work(None)`` offline."""
    if offline:
        logger.debug("database disabled -> offline mode")
        return work(None)
    try:
        conn = psycopg2.connect(resolve_dsn(cfg))
    except psycopg2.Error as e:
        logger.info(f"DB connection failed -> offline mode: {e}")
        return work(None)
    # explicit BEGIN / COMMIT are issued by the commit layer
    conn.autocommit = True
    with closing(conn), conn.cursor() as cur:
        return work(cur)


def _execute(args: argparse.Namespace, cfg: ImportConfig, cursor: Any, logger: logging.Logger) -> ImportRun | None:
    try:
        return run_import(
            args.kind,
            args.file,
            cfg,
            cursor,
            accept_warnings=args.accept_warnings,
            dry_run=args.dry_run,
            skip_header=args.skip_header,
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
    except CommitError as e:
        logger.error(f"commit: {e}")
    return None


def _report(run: ImportRun, logger: logging.Logger) -> int:
    result = run.result
    for w in preview_messages(result.warnings):
        logger.warning(w)
    for er in preview_messages(result.errors):
        logger.error(er)

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line[len("SUMMARY "):])

    if not run.importable:
        if result.error_rows:
            logger.error(f"import blocked: {len(result.error_rows)} row(s) with errors")
        elif result.warning_rows:
            logger.warning("import blocked: warnings not accepted (re-run with --accept-warnings)")
        else:
            logger.error("import blocked: no rows to import")
        return EXIT_BLOCKED

    if run.committed:
        logger.info(render_outcome_line(run.kind, run.outcome))
    return EXIT_SUCCESS


def _bootstrap(args: argparse.Namespace, cfg: ImportConfig, offline: bool, logger: logging.Logger) -> int:
    logger.info(f"Bootstrapping manager: {args.name}")
    try:
        run = _with_cursor(
            cfg,
            offline,
            logger,
            lambda cur: bootstrap_manager(args.name, args.department, args.position, cfg, cur, dry_run=args.dry_run),
        )
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    except CommitError as e:
        logger.error(f"commit: {e}")
        return EXIT_FATAL

    if run.errors:
        for er in run.errors:
            logger.error(er)
        logger.error("manager not created")
        return EXIT_BLOCKED
    if run.created:
        logger.info(f"manager created: {run.name}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    # offline: DISABLE_DB_CONNECT=1, or a dry run that has a reference file
    offline = os.getenv("DISABLE_DB_CONNECT") == "1" or bool(args.dry_run and cfg.reference_file)

    if args.kind == BOOTSTRAP_MANAGER:
        return _bootstrap(args, cfg, offline, logger)

    if not args.file.exists():
        logger.error(f"file not found: {args.file}")
        return EXIT_FATAL

    logger.info(f"Validating {args.kind} from: {args.file}")
    run = _with_cursor(cfg, offline, logger, lambda cur: _execute(args, cfg, cur, logger))
    if run is None:
        return EXIT_FATAL
    return _report(run, logger)
