"""devwisdom - wisdom quotes and advisors for development workflows.

Speaks JSON-RPC 2.0 (MCP) over stdio: one JSON object per line on stdin,
responses on stdout, diagnostics on stderr.

Usage:
    devwisdom                       Start the stdio server
    devwisdom --log-dir PATH        Keep the consultation log in PATH
    devwisdom --no-consultation-log Run without a consultation log
    devwisdom --help                Show this help message

Environment Variables:
    DEVWISDOM_LOG_DIR            Consultation log directory (default: .devwisdom)
    DEVWISDOM_LOG_LEVEL          Logging level (default: WARNING)
    DEVWISDOM_APP_LOG_PATH       Also write diagnostics to this rotating file
    DEVWISDOM_DEFAULT_SOURCE     Source used when get_wisdom omits one
    DEVWISDOM_SOURCES_CACHE_TTL  Seconds a parsed sources.json stays cached
    DEVWISDOM_PROJECT_ROOT       Project root for sources.json discovery
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .consultation_log import ConsultationLog
from .errors import ConsultationLogError
from .logging_setup import configure_logging
from .mcp_server import WisdomServer, run_stdio_server
from .settings import settings
from .wisdom import AdvisorRegistry, SourceCache, SourceLoader, WisdomEngine

logger = logging.getLogger("devwisdom")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devwisdom",
        description="devwisdom - wisdom quotes and advisors over JSON-RPC stdio",
        epilog="""
Examples:
  devwisdom                          Start the server with defaults
  devwisdom --log-dir ~/.devwisdom   Keep consultations in your home directory
  devwisdom --log-level DEBUG        Trace every request on stderr
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=settings.log_dir,
        help=f"Consultation log directory (default: {settings.log_dir})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=settings.log_level.upper(),
        help=f"Logging level (default: {settings.log_level.upper()})",
    )
    parser.add_argument(
        "--no-consultation-log",
        action="store_true",
        help="Do not record consultations",
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def build_server(log_dir: Path | None) -> WisdomServer:
    """Wire the engine and consultation log into a server.

    A consultation log that cannot be opened is reported and the server
    runs without one.
    """
    loader = SourceLoader(
        project_root=settings.project_root,
        cache=SourceCache(settings.sources_cache_ttl_seconds),
    )
    engine = WisdomEngine(loader=loader, advisors=AdvisorRegistry())
    engine.initialize()

    consultation_log: ConsultationLog | None = None
    if log_dir is not None:
        try:
            consultation_log = ConsultationLog(log_dir)
        except ConsultationLogError as exc:
            logger.warning("Consultation logging disabled: %s", exc.message)

    return WisdomServer(engine, consultation_log, settings)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the devwisdom server."""
    args = build_parser().parse_args(argv)

    configure_logging(level=args.log_level)

    server = build_server(None if args.no_consultation_log else args.log_dir.expanduser())
    logger.info("devwisdom %s ready on stdio", __version__)
    return 0 if run_stdio_server(server) else 1


if __name__ == "__main__":
    sys.exit(main())
