"""Placeholder components returned when model output cannot be normalized."""

import json
import re

from screen2code.core.types import CodeFormat

EXCERPT_LENGTH = 300

FALLBACK_MARKER = "// Fallback: "
FALLBACK_MARKER_RE = re.compile(r"^// Fallback: (?P<reason>.+?)[ \t]*$", re.M)

REACT_MUI_PLACEHOLDER = """\
import React from 'react';
import { Alert, AlertTitle, Box, Typography } from '@mui/material';

__MARKER__
function GeneratedComponent() {
  return (
    <Box sx={{ p: 3 }}>
      <Alert severity="warning" role="alert" aria-label="Generation fallback">
        <AlertTitle>Preview unavailable</AlertTitle>
        The generated code could not be rendered directly. The model output is shown below.
      </Alert>
      <Typography
        component="pre"
        variant="body2"
        sx={{ mt: 2, p: 2, bgcolor: 'grey.100', borderRadius: 1, whiteSpace: 'pre-wrap', overflowX: 'auto' }}
      >
        {__EXCERPT__}
      </Typography>
    </Box>
  );
}

export default GeneratedComponent;
"""

REACT_NATIVE_PLACEHOLDER = """\
import React from 'react';
import { SafeAreaView, ScrollView, StyleSheet, Text, View } from 'react-native';

__MARKER__
function App() {
  return (
    <SafeAreaView style={styles.container}>
      <View style={styles.card} accessible accessibilityLabel="Generation fallback">
        <Text style={styles.title}>Preview unavailable</Text>
        <Text style={styles.message}>The generated code could not be rendered directly.</Text>
        <ScrollView style={styles.excerpt}>
          <Text style={styles.code}>{__EXCERPT__}</Text>
        </ScrollView>
      </View>
    </SafeAreaView>
  );
}

const styles = StyleSheet.create({
  container: { flex: 1, backgroundColor: '#f5f5f5', justifyContent: 'center', padding: 16 },
  card: { backgroundColor: '#ffffff', borderRadius: 12, padding: 16, borderLeftWidth: 4, borderLeftColor: '#ed6c02' },
  title: { fontSize: 18, fontWeight: '600', marginBottom: 8 },
  message: { fontSize: 14, color: '#555555', marginBottom: 12 },
  excerpt: { maxHeight: 240, backgroundColor: '#eeeeee', borderRadius: 8, padding: 8 },
  code: { fontFamily: 'monospace', fontSize: 12 },
});

export default App;
"""

FLUTTER_PLACEHOLDER = """\
import 'package:flutter/material.dart';

__MARKER__
void main() {
  runApp(MyApp());
}

class MyApp extends StatelessWidget {
  const MyApp({super.key});

  @override
  Widget build(BuildContext context) {
    return MaterialApp(
      debugShowCheckedModeBanner: false,
      home: Scaffold(
        appBar: AppBar(title: const Text('Preview unavailable')),
        body: Padding(
          padding: const EdgeInsets.all(16),
          child: Column(
            crossAxisAlignment: CrossAxisAlignment.start,
            children: [
              const Icon(Icons.warning_amber_rounded, color: Colors.orange, size: 48, semanticLabel: 'Warning'),
              const SizedBox(height: 16),
              const Text('The generated code could not be rendered directly.'),
              const SizedBox(height: 16),
              Expanded(
                child: SingleChildScrollView(
                  child: Text(
                    '__EXCERPT__',
                    style: const TextStyle(fontFamily: 'monospace', fontSize: 12),
                  ),
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

_PLACEHOLDERS = {
    CodeFormat.REACT_MUI: REACT_MUI_PLACEHOLDER,
    CodeFormat.REACT_NATIVE: REACT_NATIVE_PLACEHOLDER,
    CodeFormat.FLUTTER: FLUTTER_PLACEHOLDER,
}


def excerpt(raw_text: str, limit: int = EXCERPT_LENGTH) -> str:
    text = raw_text.replace("`", "").strip()
    if len(text) > limit:
        return text[:limit].rstrip() + "..."
    return text


def _dart_string(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("$", "\\$")
        .replace("\r", "")
        .replace("\n", "\\n")
    )


def render_fallback(code_format: CodeFormat, reason: str, raw_text: str = "") -> str:
    """Raw placeholder source for ``code_format``; ``normalize`` runs it through the passes."""
    reason = " ".join(reason.replace("`", "").split()) or "unknown"
    source = _PLACEHOLDERS[code_format].replace("__MARKER__", FALLBACK_MARKER + reason)
    snippet = excerpt(raw_text) or "(empty response)"

    if code_format == CodeFormat.FLUTTER:
        return source.replace("__EXCERPT__", _dart_string(snippet))
    # a JSON string is a valid JS string literal
    return source.replace("__EXCERPT__", json.dumps(snippet))
