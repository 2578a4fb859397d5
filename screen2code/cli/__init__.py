"""screen2code command line entry point."""
import asyncio
from typing import Optional, Sequence

from screen2code.cli.parser import parse_args
from screen2code.core.exceptions import Screen2CodeError
from screen2code.utils import FancyLogger, setup_logger

LOG = FancyLogger(__name__)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    setup_logger("DEBUG" if args.verbose else None)

    try:
        asyncio.run(args.command_func(args))
    except Screen2CodeError as e:
        LOG.error(str(e))
        return 1
    except KeyboardInterrupt:
        return 130
    return 0

