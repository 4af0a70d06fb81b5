"""Application entry point for the notestore server."""

from notestore.app import App
from notestore.config import Config
from notestore.logging import setup_logging
from notestore.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
