from urllib.parse import quote

from screen2code.core.models import NormalizedCode
from screen2code.core.types import CodeFormat
from screen2code.preview.base import BasePreviewAdapter, PreviewResource
from screen2code.utils import FancyLogger

LOG = FancyLogger(__name__)

# shown instead of the generated app when its source does not fit in a URL
TOO_LONG_PLACEHOLDER = """\
import 'package:flutter/material.dart';

void main() {
  runApp(const MyApp());
}

class MyApp extends StatelessWidget {
  const MyApp({super.key});

  @override
  Widget build(BuildContext context) {
    return MaterialApp(
      title: 'Flutter Preview',
      theme: ThemeData(primarySwatch: Colors.blue),
      home: Scaffold(
        appBar: AppBar(
          title: const Text('Flutter Preview'),
          backgroundColor: Colors.blue,
        ),
        body: const Center(
          child: Column(
            mainAxisAlignment: MainAxisAlignment.center,
            children: [
              Icon(Icons.flutter_dash, size: 100, color: Colors.blue),
              SizedBox(height: 20),
              Text(
                'Flutter Preview',
                style: TextStyle(fontSize: 24, fontWeight: FontWeight.bold),
              ),
              SizedBox(height: 10),
              Padding(
                padding: EdgeInsets.all(16.0),
                child: Text(
                  'Code was too complex for direct preview. Please copy the code to your local Flutter environment.',
                  textAlign: TextAlign.center,
                  style: TextStyle(fontSize: 16),
                ),
              ),
            ],
          ),
        ),
      ),
    );
  }
}
"""


def encode_uri_component(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe="!~*'()")


class DartPadPreviewAdapter(BasePreviewAdapter):
    code_format = CodeFormat.FLUTTER

    def source_url(self, source: str) -> str:
        return (
            f"{self.config.dartpad_url}?source={encode_uri_component(source)}"
            "&theme=dark&run=true&null_safety=true"
        )

    def placeholder_url(self) -> str:
        return self.source_url(TOO_LONG_PLACEHOLDER)

    def build(self, code: NormalizedCode) -> PreviewResource:
        self._check_format(code)

        encoded_length = len(encode_uri_component(code.text))
        if encoded_length > self.config.max_url_length:
            LOG.warning(
                f"Flutter source is {encoded_length} characters once encoded "
                f"(limit {self.config.max_url_length}); previewing the placeholder app"
            )
            return PreviewResource(code_format=self.code_format, url=self.placeholder_url())

        return PreviewResource(code_format=self.code_format, url=self.source_url(code.text))
