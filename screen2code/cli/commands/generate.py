"""Command implementation for generating code from a screenshot."""
from rich.console import Console

from screen2code.agents.generation import generate_code
from screen2code.cli.types import GenerateCommandArgs
from screen2code.cli.utils import create_config, load_image
from screen2code.core.exceptions import ConfigurationError
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)


async def generate_command(args: GenerateCommandArgs) -> None:
    """Execute the generate command.

    Args:
        args: Typed command line arguments
    """
    config = create_config(args.config)
    if args.image is None and not args.description:
        raise ConfigurationError("Pass an image or --description")
    image = load_image(args.image) if args.image is not None else None

    result = await generate_code(
        ui_description=args.description,
        image=image,
        user_prompt=args.prompt,
        device_type=args.device_type,
        code_format=args.code_format,
        llm_config=config.llm,
        preview_config=config.preview,
        with_preview=args.preview,
    )

    if result.code.is_fallback:
        LOG.warning(f"Model output could not be normalized: {result.code.fallback_reason}")
    for issue in result.quality_issues:
        LOG.warning(f"Quality check: missing {issue}")

    console = Console()
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.code.text, encoding="utf-8")
        LOG.info(f"Wrote {result.code.component_name} to {args.output}")
    else:
        console.print(result.code.text, markup=False, highlight=False)

    if result.preview is not None:
        if result.preview.url:
            console.print(f"Preview: {result.preview.url}", markup=False)
        else:
            console.print(f"Preview bundle: {', '.join(sorted(result.preview.bundle_files))}", markup=False)
    elif result.preview_error:
        LOG.warning(f"Preview unavailable: {result.preview_error}")
