from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from screen2code.agents.generation import GenerationResult
from screen2code.cli import main
from screen2code.cli.commands.describe import describe_command
from screen2code.cli.commands.generate import generate_command
from screen2code.cli.commands.preview import preview_command
from screen2code.cli.commands.serve import serve_command
from screen2code.cli.parser import parse_args
from screen2code.cli.types import (
    DescribeCommandArgs,
    GenerateCommandArgs,
    PreviewCommandArgs,
    ServeCommandArgs,
)
from screen2code.normalizer import normalize

FLUTTER_APP = (
    "class MyApp extends StatelessWidget {\n"
    "  Widget build(BuildContext context) {\n"
    "    return MaterialApp();\n"
    "  }\n"
    "}\n"
)


class TestParseArgs:
    def test_generate(self):
        args = parse_args(
            ["-v", "generate", "shot.png", "--format", "flutter", "--device", "mobile", "-o", "out/main.dart"]
        )

        assert isinstance(args, GenerateCommandArgs)
        assert args.verbose is True
        assert args.image == Path("shot.png")
        assert args.code_format == "flutter"
        assert args.device_type == "mobile"
        assert args.output == Path("out/main.dart")
        assert args.preview is False
        assert args.command_func is generate_command

    def test_generate_from_description(self):
        args = parse_args(["generate", "--description", "A login form", "--prompt", "dark theme", "--preview"])

        assert args.image is None
        assert args.description == "A login form"
        assert args.prompt == "dark theme"
        assert args.code_format == "react-mui"
        assert args.preview is True

    def test_describe(self):
        args = parse_args(["--config", "settings/.env.local", "describe", "shot.png"])

        assert isinstance(args, DescribeCommandArgs)
        assert args.config == Path("settings/.env.local")
        assert args.command_func is describe_command

    def test_preview(self):
        args = parse_args(["preview", "App.js", "--format", "react-native"])

        assert isinstance(args, PreviewCommandArgs)
        assert args.file == Path("App.js")
        assert args.register is False
        assert args.command_func is preview_command

    def test_serve_defaults(self):
        args = parse_args(["serve"])

        assert isinstance(args, ServeCommandArgs)
        assert (args.host, args.port) == ("127.0.0.1", 8000)
        assert args.command_func is serve_command

    def test_rejects_unknown_format(self):
        with pytest.raises(SystemExit):
            parse_args(["generate", "shot.png", "--format", "vue"])

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            parse_args([])


@patch("screen2code.cli.setup_logger")
def test_main_preview_prints_url(mock_setup_logger, tmp_path, capsys):
    source = tmp_path / "main.dart"
    source.write_text(FLUTTER_APP)

    assert main(["preview", str(source), "--format", "flutter"]) == 0
    assert "https://dartpad.dev/?source=" in capsys.readouterr().out


@patch("screen2code.cli.setup_logger")
def test_main_preview_lists_bundle(mock_setup_logger, tmp_path, capsys, react_mui_output):
    source = tmp_path / "GeneratedComponent.jsx"
    source.write_text(react_mui_output)

    assert main(["preview", str(source)]) == 0
    assert "src/GeneratedComponent.js" in capsys.readouterr().out


@patch("screen2code.cli.setup_logger")
def test_main_reports_errors(mock_setup_logger, tmp_path):
    assert main(["preview", str(tmp_path / "missing.jsx")]) == 1
    assert main(["--config", str(tmp_path / "missing.env"), "describe", "shot.png"]) == 1
    assert main(["generate"]) == 1


@patch("screen2code.cli.setup_logger")
def test_main_generate_writes_output(mock_setup_logger, tmp_path, react_mui_output):
    code = normalize(react_mui_output, "react-mui")
    result = GenerationResult(ui_description="A login form", code=code)
    output = tmp_path / "out" / "GeneratedComponent.jsx"

    with patch("screen2code.cli.commands.generate.generate_code", AsyncMock(return_value=result)) as mock_generate:
        exit_code = main(["generate", "--description", "A login form", "-o", str(output)])

    assert exit_code == 0
    assert output.read_text() == code.text
    assert mock_generate.call_args.kwargs["ui_description"] == "A login form"
    assert mock_generate.call_args.kwargs["with_preview"] is False


@patch("screen2code.cli.setup_logger")
def test_main_generate_rejects_non_image(mock_setup_logger, tmp_path):
    notes = tmp_path / "notes.txt"
    notes.write_text("not an image")

    assert main(["generate", str(notes)]) == 1
