"""Entry point for the Hex publish plugin."""

import logging
import sys

from dotenv import load_dotenv

from .config import Settings
from .server import create_server


def main():
    """Run the plugin server on stdio."""
    load_dotenv()
    settings = Settings()

    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    server = create_server(settings)
    server.run(transport="stdio")


if __name__ == "__main__":
    main()
