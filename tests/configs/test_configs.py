import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

from pydantic import ValidationError
from pydantic_ai.models.test import TestModel

from screen2code.configs import AppConfig, LLMConfig, PreviewConfig, PublishConfig
from screen2code.configs.base import generate_model_config, get_resource_path, resolve_api_key
from screen2code.configs.defaults import DEFAULT_MAX_URL_LENGTH, DEFAULT_PUBLISH_DIR
from screen2code.core.exceptions import ConfigurationError
from screen2code.core.types import ModelProvider
from screen2code.utils import create_pydantic_model


class TestGetResourcePath(unittest.TestCase):
    """Test cases for get_resource_path function"""

    def setUp(self):
        self.test_relative_path = "settings/.env"
        self.test_cwd = Path("/home/user/project")
        self.test_meipass = Path("/tmp/_MEI123456/")

    @patch('screen2code.configs.base.sys.frozen', False, create=True)
    @patch('screen2code.configs.base.Path.cwd')
    def test_get_resource_path_development_mode(self, mock_cwd):
        """Resolves against the working directory when not bundled"""
        mock_cwd.return_value = self.test_cwd

        result = get_resource_path(self.test_relative_path)

        self.assertEqual(result, self.test_cwd / self.test_relative_path)
        mock_cwd.assert_called_once()

    @patch('screen2code.configs.base.sys._MEIPASS', "", create=True)
    @patch('screen2code.configs.base.sys.frozen', True, create=True)
    def test_get_resource_path_pyinstaller_mode(self):
        """Resolves against the bundle directory in a PyInstaller build"""
        sys._MEIPASS = str(self.test_meipass)

        result = get_resource_path(self.test_relative_path)

        self.assertEqual(result, self.test_meipass / self.test_relative_path)


class TestModelConfig(unittest.TestCase):
    def test_generate_model_config(self):
        config = generate_model_config(env_prefix="LLM_")

        self.assertEqual(config["env_prefix"], "LLM_")
        self.assertEqual(config["env_nested_delimiter"], "__")
        self.assertEqual(config["extra"], "ignore")
        self.assertTrue(config["env_file"].endswith(os.path.join("settings", ".env")))

    @patch.dict(os.environ, {"LLM_MODEL_PROVIDER": "anthropic", "LLM_REFINE_ATTEMPTS": "2"}, clear=True)
    def test_llm_config_from_environment(self):
        config = LLMConfig()

        self.assertEqual(config.model_provider, ModelProvider.ANTHROPIC)
        self.assertEqual(config.refine_attempts, 2)

    @patch.dict(os.environ, {"PREVIEW__MAX_URL_LENGTH": "1200"}, clear=True)
    def test_nested_app_config_from_environment(self):
        config = AppConfig()

        self.assertEqual(config.preview.max_url_length, 1200)
        self.assertEqual(config.publish.output_dir, Path(DEFAULT_PUBLISH_DIR))

    def test_defaults(self):
        self.assertEqual(LLMConfig().refine_attempts, 0)
        self.assertEqual(PreviewConfig().max_url_length, DEFAULT_MAX_URL_LENGTH)
        self.assertEqual(PublishConfig().output_dir, Path(DEFAULT_PUBLISH_DIR))

    def test_refine_attempts_bounds(self):
        with self.assertRaises(ValidationError):
            LLMConfig(refine_attempts=3)
        with self.assertRaises(ValidationError):
            LLMConfig(refine_attempts=-1)


class TestApiKeys(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_api_key_is_exported_for_provider(self):
        LLMConfig(model_provider=ModelProvider.ANTHROPIC, api_key="sk-ant-test")

        self.assertEqual(os.environ["ANTHROPIC_API_KEY"], "sk-ant-test")

    @patch.dict(os.environ, {"GEMINI_API_KEY": "gemini-key"}, clear=True)
    def test_resolve_api_key_from_environment(self):
        self.assertEqual(resolve_api_key(ModelProvider.GOOGLE, None), "gemini-key")
        self.assertEqual(resolve_api_key(ModelProvider.GOOGLE, "explicit"), "explicit")
        self.assertIsNone(resolve_api_key(ModelProvider.OPENAI, None))


class TestCreatePydanticModel(unittest.TestCase):
    def test_testing_provider(self):
        model = create_pydantic_model(LLMConfig(model_provider=ModelProvider.TESTING))
        self.assertIsInstance(model, TestModel)

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_key(self):
        with self.assertRaises(ConfigurationError):
            create_pydantic_model(LLMConfig(model_provider=ModelProvider.OPENAI))

    @patch.dict(os.environ, {}, clear=True)
    def test_string_model_name(self):
        config = LLMConfig(model_provider=ModelProvider.OPENAI, model_name="gpt-4o", api_key="sk-test")
        self.assertEqual(create_pydantic_model(config), "openai:gpt-4o")

    @patch.dict(os.environ, {}, clear=True)
    def test_azure_needs_endpoint(self):
        config = LLMConfig(model_provider=ModelProvider.AZURE, model_name="gpt-4o", api_key="azure-key")
        with self.assertRaises(ConfigurationError):
            create_pydantic_model(config)


if __name__ == '__main__':
    unittest.main()
