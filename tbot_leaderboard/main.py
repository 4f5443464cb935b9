"""Entry point: serve the leaderboard API with uvicorn."""

import logging
import uvicorn

from tbot_leaderboard.config import Config
from tbot_leaderboard.app import create_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def main():
    """Load config from the environment, set up logging and run the server."""
    config = Config.from_env()
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
