"""Command implementation for describing a screenshot."""
from rich.console import Console

from screen2code.cli.types import DescribeCommandArgs
from screen2code.cli.utils import create_config, load_image
from screen2code.llm import invoke
from screen2code.prompts import build_description_prompt


async def describe_command(args: DescribeCommandArgs) -> None:
    config = create_config(args.config)
    image = load_image(args.image)

    description = await invoke(build_description_prompt(), image, config=config.llm)
    Console().print(description.strip(), markup=False)
