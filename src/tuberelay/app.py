"""Main entry point for the TubeRelay desktop application."""

import logging

import requests

from .core import RelayClient
from .server import serve_in_background
from .ui import TubeRelayApp
from .utils import Config, log_error, setup_logging
from .version import __version__

logger = logging.getLogger(__name__)


def ensure_relay(config: Config, relay: RelayClient):
    """Start an in-process relay server when none answers at ``config.server_url``.

    The client is pointed at the started relay. Returns the werkzeug server
    that was started, or None when an external relay is already running.
    """
    try:
        relay.health()
        logger.info(f"Using relay server at {relay.base_url}")
        return None
    except requests.RequestException as e:
        logger.info(f"No relay server at {relay.base_url} ({e}), starting one in-process")
    _, server = serve_in_background(config)
    relay.base_url = config.local_server_url
    return server


def main():
    """Main entry point."""
    setup_logging(logging.DEBUG)
    server = None
    try:
        logger.info(f"Starting TubeRelay v{__version__}")
        config = Config()
        relay = RelayClient(config.server_url)
        server = ensure_relay(config, relay)

        logger.info("Initializing application...")
        app = TubeRelayApp(config=config, relay=relay)
        logger.info("Application initialized, starting main loop...")
        app.mainloop()
        logger.info("Application closed normally")
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.error(f"Fatal error in main(): {e}", exc_info=True)
        log_error("Fatal error in main()", e)
        raise
    finally:
        if server is not None:
            server.shutdown()


if __name__ == "__main__":
    main()
