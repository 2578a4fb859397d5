"""Command implementation for building a preview of existing code."""
from rich.console import Console
from rich.table import Table

from screen2code.cli.types import PreviewCommandArgs
from screen2code.cli.utils import create_config
from screen2code.core.exceptions import ConfigurationError, PreviewUnavailableError
from screen2code.normalizer import normalize
from screen2code.preview import PreviewAdapterFactory, SandpackPreviewAdapter


async def preview_command(args: PreviewCommandArgs) -> None:
    config = create_config(args.config)
    if not args.file.is_file():
        raise ConfigurationError(f"File not found: {args.file}")

    code = normalize(args.file.read_text(encoding="utf-8"), args.code_format)
    adapter = PreviewAdapterFactory.create(code.code_format, config.preview)
    resource = adapter.build(code)

    console = Console()
    if resource.url:
        console.print(resource.url, markup=False, soft_wrap=True)
        return

    if args.register:
        if not isinstance(adapter, SandpackPreviewAdapter):
            raise PreviewUnavailableError(f"{code.code_format} previews cannot be registered")
        console.print(await adapter.register(resource), markup=False)
        return

    table = Table(title=f"Preview bundle (entry: {resource.entry_file})")
    table.add_column("File")
    table.add_column("Size", justify="right")
    for path, content in sorted(resource.bundle_files.items()):
        table.add_row(path, str(len(content)))
    console.print(table)
