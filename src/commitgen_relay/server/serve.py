"""Launch the relay under uvicorn."""
from __future__ import annotations
import argparse
import logging

import uvicorn

from commitgen_relay.common.config import load_settings
from commitgen_relay.common.logging_setup import setup_logging
from commitgen_relay.server.fastapi_app import create_app

LOGGER = logging.getLogger("commitgen.server.serve")

def main(argv: list[str] | None = None) -> None:
    ap = argparse.ArgumentParser(description="Serve the commit message relay")
    ap.add_argument("--host", default=None, help="Bind address (env HOST)")
    ap.add_argument("--port", type=int, default=None, help="Port (env PORT, default 3000)")
    ap.add_argument("--config", default=None, help="YAML settings file")
    ap.add_argument("--log-level", default=None, help="Logging level (env LOG_LEVEL)")
    args = ap.parse_args(argv)

    settings = load_settings(
        config_path=args.config,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    setup_logging(settings.log_level)

    app = create_app(settings)
    LOGGER.info("Server running on port %s (model=%s)", settings.port, settings.model)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()
