import base64
import json
from urllib.parse import quote

from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat
from screen2code.preview.base import BasePreviewAdapter, PreviewResource

SNACK_DEPENDENCIES = {
    "react-native": "0.73.0",
    "expo": "~50.0.0",
    "@react-native-picker/picker": "^2.7.0",
    "@expo/vector-icons": "^14.0.0",
}


class SnackPreviewAdapter(BasePreviewAdapter):
    """Expo Snack embed URL carrying the whole project in its query string"""

    code_format = CodeFormat.REACT_NATIVE

    def manifest(self, code: NormalizedCode) -> dict:
        return {
            "files": {"App.js": {"type": "CODE", "contents": code.text}},
            "dependencies": dict(SNACK_DEPENDENCIES),
            "platform": self.config.snack_platform,
            "theme": self.config.snack_theme,
        }

    def build(self, code: NormalizedCode) -> PreviewResource:
        self._check_format(code)

        payload = json.dumps(self.manifest(code), separators=(",", ":"), ensure_ascii=False)
        encoded = base64.b64encode(payload.encode("utf-8")).decode("ascii")
        url = (
            f"{self.config.snack_embed_url}?screen=preview"
            f"&theme={quote(self.config.snack_theme, safe='')}"
            f"&code={quote(encoded, safe='')}"
        )
        return PreviewResource(code_format=self.code_format, url=url)

