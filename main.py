"""
OpenShock client demo

Reads the API key from the environment (or a .env file), prints the backend
version, the account's hubs, the first hub's details and its shockers.
"""

from dotenv import load_dotenv

load_dotenv()

from tools import logger, setup_logging
from openshock_api import create_client_from_env
from openshock_errors import OpenShockError

import sys

__version__ = "1.0"


def main():
    setup_logging()

    logger.info("Welcome to the OpenShock API client")
    logger.info(f"Version: {__version__}")

    client = create_client_from_env()
    if client is None:
        return 1

    try:
        logger.info(f"OpenShock API Backend Version: {client.backend_version()}")

        hubs = client.fetch_hubs()
        logger.info(f"Found {len(hubs)} hub(s)")
        if not hubs:
            return 0

        first_hub = client.fetch_hub(hubs[0].id)
        logger.info(f"Hub details: {first_hub!r}")

        for shocker in first_hub.fetch_shockers():
            paused = " (paused)" if shocker.is_paused else ""
            logger.info(f"  - {shocker.name} [{shocker.model}] id={shocker.id}{paused}")
    except OpenShockError as e:
        logger.error(f"OpenShock demo failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
