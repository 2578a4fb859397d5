"""Command implementation for the API server."""
import uvicorn

from screen2code.cli.types import ServeCommandArgs
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)


async def serve_command(args: ServeCommandArgs) -> None:
    LOG.info(f"Starting screen2code API on {args.host}:{args.port}")
    server = uvicorn.Server(
        uvicorn.Config(
            "screen2code.api.main:app",
            host=args.host,
            port=args.port,
            log_level="debug" if args.verbose else "info",
        )
    )
    await server.serve()
