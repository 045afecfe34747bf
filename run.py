import asyncio
import logging

from userops import config
from userops.container import Container


def main(container: Container = None):
    """Run the create/delete script once.

    Args:
        container: Optional DI container (for testing). If None, creates default container.
    """
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if container is None:
        container = Container()

    runner = container.script_runner()
    asyncio.run(runner.run())


if __name__ == '__main__':
    main()
