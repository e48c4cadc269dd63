"""Entry point for running journalbot as a module or installed script.

Usage:
    journalbot / python -m journalbot                → HTTP API (uvicorn)
    journalbot <command> ... / python -m journalbot <command> ... → CLI
"""

import sys

import uvicorn


def run() -> None:
    """Entry point: no args → HTTP API, else → CLI."""
    if len(sys.argv) == 1:
        from journalbot.config import Settings
        from journalbot.logging_config import setup_logging

        settings = Settings.load()
        setup_logging(settings.log_level, settings.metadata_dir)
        uvicorn.run(
            "journalbot.web.app:app",
            host=settings.host,
            port=settings.port,
            reload=settings.environment == "development",
        )
    else:
        from journalbot.cli import main
        main()


if __name__ == "__main__":
    run()
