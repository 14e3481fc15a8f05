import asyncio
import sys

from dotenv import load_dotenv
from loguru import logger

from papertrade.application.services import CommandDispatcher
from papertrade.core.config import Config
from papertrade.shared.container import create_container
from papertrade.shared.exceptions import ConfigurationError


def main() -> int:
    """CLI entry point for the paper trading engine

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    logger.add(
        "logs/papertrade_{time}.log",
        rotation="1 day",
        retention="30 days",
        compression="gz",
        level="INFO",
    )
    load_dotenv()

    try:
        config = Config.from_env()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    container = create_container(config)

    async def run():
        dispatcher = CommandDispatcher(container.service, config.account_id)
        try:
            return await dispatcher.dispatch(sys.argv)
        finally:
            await container.aclose()

    try:
        return asyncio.run(run())
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 1
    except Exception as e:
        logger.critical(f"Unhandled exception: {e!r}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
