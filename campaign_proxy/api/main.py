"""
Process entrypoint for the campaign AI proxy.

Startup sequence:
1. Configure logging.
2. Load `ProxyConfig` from the environment. Any `ConfigurationError` is fatal:
   the process logs it and exits with status 1 before a listener is bound.
3. Build the application with `create_app(config)`.
4. Serve it with uvicorn on the configured host and port.
"""

import logging
import sys

import uvicorn

from campaign_proxy.api.http_api import create_app
from campaign_proxy.core.errors import ConfigurationError
from campaign_proxy.llm.provider_config import load_config

logger = logging.getLogger("campaign_proxy")


def configure_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def main():
    configure_logging()

    try:
        config = load_config()
    except ConfigurationError as err:
        logger.critical("FATAL ERROR: %s", err)
        sys.exit(1)

    if config.debug:
        configure_logging(debug=True)

    app = create_app(config)

    logger.info("AI proxy server listening on port %s", config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level="debug" if config.debug else "info")


if __name__ == "__main__":
    main()
