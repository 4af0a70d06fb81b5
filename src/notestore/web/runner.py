"""Uvicorn server runner for the notes API."""

import copy

import structlog
import uvicorn
from uvicorn.config import LOGGING_CONFIG

from notestore.app import App
from notestore.config import Config
from notestore.web.server import create_fastapi_app

logger = structlog.get_logger(__name__)


def run_server(app: App, config: Config) -> None:
    """Serve the notes API, with uvicorn's access log in a compact one-line format."""
    fastapi_app = create_fastapi_app(app, config)

    log_config = copy.deepcopy(LOGGING_CONFIG)
    log_config["formatters"]["access"]["fmt"] = '%(asctime)s - "%(request_line)s" %(status_code)s'
    log_config["formatters"]["default"]["fmt"] = "%(asctime)s - %(levelname)s - %(message)s"

    logger.info("starting_server", host=config.host, port=config.port, collection=config.notes_collection)
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=log_config,
        log_level="debug" if config.debug else "info",
        access_log=True,
    )
