"""structlog setup shared by the API process and its pymongo/uvicorn loggers."""

import logging

import structlog

# Driver internals that log every heartbeat and command at DEBUG
NOISY_LOGGERS = ("pymongo", "pymongo.topology", "pymongo.connection", "pymongo.serverSelection", "pymongo.command")


def setup_logging(debug: bool) -> None:
    """Route stdlib and structlog output through one pipeline.

    Debug mode renders colored console lines at DEBUG; otherwise JSON lines at
    INFO. Values bound with structlog.contextvars (request id, method, path)
    are merged into every event.
    """
    logging.basicConfig(level=logging.DEBUG if debug else logging.INFO, format="%(message)s")
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    renderer: structlog.types.Processor = (
        structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
