"""Run the tonebox player screen: ``python -m tonebox [config.yaml]``."""

import sys

from loguru import logger

from .config import PlayerUIConfig
from .tui import PlayerApp


def main(argv: list[str] | None = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    if args:
        logger.info(f"Loading player config from: {args[0]}")
        config = PlayerUIConfig.from_yaml(args[0])
    else:
        config = PlayerUIConfig()
    PlayerApp.run_app(config)


if __name__ == "__main__":
    main()
