DEFAULT_MODEL_NAME = "gpt-4o"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434/v1"
DEFAULT_AZURE_API_VERSION = "2024-02-15-preview"

DEFAULT_MAX_REFINE_ATTEMPTS = 2

DEFAULT_DARTPAD_URL = "https://dartpad.dev/"
DEFAULT_SNACK_EMBED_URL = "https://snack.expo.dev/embed"
DEFAULT_CODESANDBOX_DEFINE_URL = "https://codesandbox.io/api/v1/sandboxes/define?json=1"
DEFAULT_CODESANDBOX_EMBED_URL = "https://codesandbox.io/embed/"

# DartPad rejects longer source query strings
DEFAULT_MAX_URL_LENGTH = 7000

DEFAULT_PUBLISH_DIR = "generated-projects/active-project"
