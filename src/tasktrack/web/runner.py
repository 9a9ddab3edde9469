"""Uvicorn server runner."""

import uvicorn

from tasktrack.app import App
from tasktrack.config import Config
from tasktrack.web.server import create_fastapi_app


def run_server(app: App, config: Config) -> None:
    """Serve the API with uvicorn, leaving log handling to ``setup_logging``."""
    fastapi_app = create_fastapi_app(app, config)

    # log_config=None keeps uvicorn off the handlers installed by setup_logging
    uvicorn.run(
        fastapi_app,
        host=config.host,
        port=config.port,
        log_config=None,
        access_log=config.debug,
        server_header=False,
    )
