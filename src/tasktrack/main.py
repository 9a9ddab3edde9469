"""Application entry point for the TaskTrack backend server."""

import structlog

from tasktrack.app import App
from tasktrack.config import Config
from tasktrack.logging import setup_logging
from tasktrack.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    structlog.get_logger(__name__).info(
        "starting",
        host=config.host,
        port=config.port,
        session_backend=config.session_backend,
        git_commit_hash=config.git_commit_hash,
    )
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
