"""Argument parsing for the screen2code CLI."""
import argparse
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Type

from screen2code.cli.commands.describe import describe_command
from screen2code.cli.commands.generate import generate_command
from screen2code.cli.commands.preview import preview_command
from screen2code.cli.commands.serve import serve_command
from screen2code.cli.types import (
    BaseCommandArgs,
    DescribeCommandArgs,
    GenerateCommandArgs,
    PreviewCommandArgs,
    ServeCommandArgs,
)
from screen2code.core.types import CodeFormat, DeviceType

# Define command configurations
COMMAND_CONFIGS: Dict[str, tuple[Type[BaseCommandArgs], Callable]] = {
    "describe": (DescribeCommandArgs, describe_command),
    "generate": (GenerateCommandArgs, generate_command),
    "preview": (PreviewCommandArgs, preview_command),
    "serve": (ServeCommandArgs, serve_command),
}

CODE_FORMATS = [f.value for f in CodeFormat]
DEVICE_TYPES = [d.value for d in DeviceType]


def _convert_to_args(parsed_namespace: argparse.Namespace) -> BaseCommandArgs:
    """Convert parsed namespace to typed arguments."""
    base_args = {
        "verbose": parsed_namespace.verbose,
        "config": parsed_namespace.config,
        "command": parsed_namespace.command,
    }

    args_class, command_func = COMMAND_CONFIGS[parsed_namespace.command]

    if parsed_namespace.command == "describe":
        args = args_class(**base_args, image=parsed_namespace.image)
    elif parsed_namespace.command == "generate":
        args = args_class(
            **base_args,
            image=parsed_namespace.image,
            description=parsed_namespace.description,
            code_format=parsed_namespace.format,
            device_type=parsed_namespace.device,
            prompt=parsed_namespace.prompt,
            output=parsed_namespace.output,
            preview=parsed_namespace.preview,
        )
    elif parsed_namespace.command == "preview":
        args = args_class(
            **base_args,
            file=parsed_namespace.file,
            code_format=parsed_namespace.format,
            register=parsed_namespace.register,
        )
    elif parsed_namespace.command == "serve":
        args = args_class(**base_args, host=parsed_namespace.host, port=parsed_namespace.port)
    else:
        raise ValueError(f"Unknown command: {parsed_namespace.command}")

    args.command_func = command_func
    return args


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="screen2code",
        description="screen2code - generate UI code from screenshots",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Global options
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an env file with settings (default: settings/.env)",
    )

    subparsers = parser.add_subparsers(title="commands", description="Available commands", dest="command")
    subparsers.required = True

    # Describe command
    describe_parser = subparsers.add_parser("describe", help="Describe the UI in a screenshot")
    describe_parser.add_argument("image", type=Path, help="Screenshot file")

    # Generate command
    generate_parser = subparsers.add_parser("generate", help="Generate code from a screenshot or description")
    generate_parser.add_argument(
        "image",
        type=Path,
        nargs="?",
        default=None,
        help="Screenshot file (optional when --description is given)",
    )
    generate_parser.add_argument("--description", type=str, default=None, help="UI description to skip image analysis")
    generate_parser.add_argument("--format", choices=CODE_FORMATS, default=CodeFormat.REACT_MUI.value, help="Target framework")
    generate_parser.add_argument("--device", choices=DEVICE_TYPES, default=DeviceType.DESKTOP.value, help="Target device")
    generate_parser.add_argument("--prompt", type=str, default="", help="Extra requirements for the model")
    generate_parser.add_argument("--output", "-o", type=Path, default=None, help="Write code to this file instead of stdout")
    generate_parser.add_argument("--preview", action="store_true", help="Also build a preview")

    # Preview command
    preview_parser = subparsers.add_parser("preview", help="Build a preview for a code file")
    preview_parser.add_argument("file", type=Path, help="Code file to preview")
    preview_parser.add_argument("--format", choices=CODE_FORMATS, default=CodeFormat.REACT_MUI.value, help="Framework of the code")
    preview_parser.add_argument("--register", action="store_true", help="Upload react-mui bundles to CodeSandbox")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Launch the API server")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind the server to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to run the server on (default: 8000)")

    return parser


def parse_args(args: Optional[Sequence[str]] = None) -> BaseCommandArgs:
    """Parse command line arguments into typed objects."""
    parser = create_parser()
    parsed_namespace = parser.parse_args(args)
    return _convert_to_args(parsed_namespace)
