"""
PdfHelper entrypoint - command line overrides on top of settings, then uvicorn.
"""

import argparse
from pathlib import Path

import uvicorn

from pdfhelper.app import build_app
from pdfhelper.config import Settings, get_settings
from pdfhelper.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the PdfHelper HTML to PDF API.")
    parser.add_argument("--host", help="Bind address (default: PDFHELPER_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (default: PDFHELPER_PORT)")
    parser.add_argument("--save-path", type=Path, help="Directory generated PDFs are stored under")
    parser.add_argument("--max-bulk", type=int, help="Largest accepted bulk batch")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING, ...")
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: Settings) -> Settings:
    """Apply command line flags that were given; everything else comes from env."""
    overrides = {
        "host": args.host,
        "port": args.port,
        "save_path": args.save_path,
        "max_generate_bulk": args.max_bulk,
        "log_level": args.log_level.upper() if args.log_level else None,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    """Run the PdfHelper server."""
    settings = settings_from_args(parse_args(argv), get_settings())
    setup_logging(settings.log_level)

    logger.info(f"Serving on http://{settings.host}:{settings.port} (docs at /docs)")
    uvicorn.run(
        build_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
