from enum import Enum


class ModelProvider(str, Enum):
    """Supported LLM providers, named after their pydantic-ai model prefixes"""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google-gla"
    AZURE = "azure"
    OLLAMA = "ollama"
    TESTING = "testing"

    def __str__(self) -> str:
        return self.value


class CodeFormat(str, Enum):
    """Target framework of the generated code"""

    REACT_MUI = "react-mui"
    REACT_NATIVE = "react-native"
    FLUTTER = "flutter"

    def __str__(self) -> str:
        return self.value


class DeviceType(str, Enum):
    DESKTOP = "desktop"
    MOBILE = "mobile"

    def __str__(self) -> str:
        return self.value


# Canonical entry-point names per format
COMPONENT_NAMES = {
    CodeFormat.REACT_MUI: "GeneratedComponent",
    CodeFormat.REACT_NATIVE: "App",
    CodeFormat.FLUTTER: "MyApp",
}
