import pytest

from screen2code.core.exceptions import ConfigurationError
from screen2code.core.models import RawModelOutput
from screen2code.core.types import CodeFormat
from screen2code.normalizer import normalize
from screen2code.preview import build_preview

REACT_NATIVE_OUTPUT = """Here is your app:
```javascript
import React, { useState } from 'react';
import { View, Text, StyleSheet, Picker } from 'react-native';
import { Button } from '@mui/material';

const LoginScreen = () => {
  const [role, setRole] = useState('user');
  return (
    <View style={styles.container}>
      <Text>Login</Text>
      <Picker selectedValue={role} onValueChange={setRole} />
      <TouchableOpacity onPress={() => {}}><Text>Go</Text></TouchableOpacity>
    </View>
  );
};

const styles = StyleSheet.create({ container: { flex: 1 } });

export default LoginScreen;
```
"""

FLUTTER_OUTPUT = """import 'package:flutter/material.dart';

class MyApp extends StatelessWidget {
  const MyApp({super.key});

  @override
  Widget build(BuildContext context) {
    return MaterialApp(home: Scaffold(body: Center(child: Text('Hello'))));
  }
}
"""

ALL_CAPS_COMPONENT = "const FAQ = () => {\n  return <Box><Typography>Q</Typography></Box>;\n};\nexport default FAQ;"

UNIMPORTED_PICKER = "function Form() {\n  return <View><Picker selectedValue=\"a\" /></View>;\n}\nexport default Form;"

FLUTTER_PAGE = """class LoginPage extends StatelessWidget {
  @override
  Widget build(BuildContext context) {
    return Scaffold(body: Text('Login'));
  }
}"""

MIXED_REACT_OUTPUT = """```jsx
import React from 'react';
import { Card } from '@mui/material';
import './styles.css';

export const Header = () => <Typography variant="h5">Profile</Typography>;

export default function () {
  const [open, setOpen] = useState(false);
  return (
    <Card>
      <Header />
      <Button onClick={() => setOpen(!open)}>Toggle</Button>
    </Card>
  );
}

ReactDOM.render(<App />, document.getElementById('root'));
```"""


def test_fenced_react_component(react_mui_output):
    result = normalize(react_mui_output, "react-mui")

    assert result.text == (
        "import React from 'react';\n"
        "\n"
        "function GeneratedComponent(){return <div>form</div>;}\n"
        "\n"
        "export default GeneratedComponent;\n"
    )
    assert result.component_name == "GeneratedComponent"
    assert result.code_format == CodeFormat.REACT_MUI
    assert not result.is_fallback


def test_react_native_output():
    result = normalize(REACT_NATIVE_OUTPUT, CodeFormat.REACT_NATIVE)

    assert result.component_name == "App"
    assert not result.is_fallback
    assert result.text.startswith(
        "import React, { useState } from 'react';\n"
        "import { StyleSheet, Text, TouchableOpacity, View } from 'react-native';\n"
        "import { Picker } from '@react-native-picker/picker';\n"
    )
    assert "const App = () =>" in result.text
    assert "@mui" not in result.text
    assert "Here is your app" not in result.text
    assert result.text.endswith("export default App;\n")


def test_flutter_output_gets_main():
    result = normalize(FLUTTER_OUTPUT, "flutter")

    assert result.component_name == "MyApp"
    assert not result.is_fallback
    assert result.text.count("package:flutter/material.dart") == 1
    assert result.text.endswith("void main() {\n  runApp(MyApp());\n}\n")


def test_mixed_react_output():
    result = normalize(MIXED_REACT_OUTPUT, "react-mui")
    text = result.text

    assert not result.is_fallback
    assert "import { Button, Card, Typography } from '@mui/material';" in text
    assert "import React, { useState } from 'react';" in text
    assert "function GeneratedComponent() {" in text
    assert "const Header = () =>" in text
    assert "styles.css" not in text
    assert "ReactDOM" not in text
    assert text.count("export") == 1


def test_accepts_raw_model_output(react_mui_output):
    assert normalize(RawModelOutput(text=react_mui_output), "react-mui") == normalize(react_mui_output, "react-mui")


@pytest.mark.parametrize(
    "raw, code_format",
    [
        (MIXED_REACT_OUTPUT, "react-mui"),
        (REACT_NATIVE_OUTPUT, "react-native"),
        (FLUTTER_OUTPUT, "flutter"),
        ("<Box>\n  <Typography>Hi</Typography>\n</Box>", "react-mui"),
        ("I'm sorry, I can't do that.", "react-native"),
        ("", "flutter"),
        (ALL_CAPS_COMPONENT, "react-mui"),
        (UNIMPORTED_PICKER, "react-native"),
        (FLUTTER_PAGE, "flutter"),
    ],
)
def test_normalize_is_idempotent(raw, code_format):
    once = normalize(raw, code_format)
    twice = normalize(once, code_format)
    assert twice == once


def test_prose_falls_back_to_placeholder():
    result = normalize("I'm sorry, I can't do that.", "react-mui")

    assert result.is_fallback
    assert result.fallback_reason == "no component definition found"
    assert result.component_name == "GeneratedComponent"
    assert "<Alert" in result.text
    assert "I'm sorry, I can't do that." in result.text
    assert result.text.endswith("export default GeneratedComponent;\n")


def test_empty_flutter_output_falls_back():
    result = normalize("", "flutter")

    assert result.fallback_reason == "empty model output"
    assert result.component_name == "MyApp"
    assert "(empty response)" in result.text
    assert "void main()" in result.text


def test_none_falls_back():
    assert normalize(None, "react-native").fallback_reason == "empty model output"


def test_fallback_excerpt_is_truncated():
    result = normalize("x" * 1000, "react-mui")
    assert "x" * 300 + "..." in result.text
    assert "x" * 301 not in result.text


def test_fallback_excerpt_has_no_backticks():
    result = normalize("Use `npm start` to run it", "react-native")
    assert result.is_fallback
    assert "`" not in result.text
    assert "Use npm start to run it" in result.text


def test_unknown_format():
    with pytest.raises(ConfigurationError):
        normalize("function App() {}", "vue")


def test_all_caps_component_name():
    result = normalize(ALL_CAPS_COMPONENT, "react-mui")

    assert not result.is_fallback
    assert result.text == (
        "import React from 'react';\n"
        "import { Box, Typography } from '@mui/material';\n"
        "\n"
        "const GeneratedComponent = () => {\n"
        "  return <Box><Typography>Q</Typography></Box>;\n"
        "};\n"
        "\n"
        "export default GeneratedComponent;\n"
    )


def test_component_preferred_over_all_caps_constant():
    raw = (
        "const THEME = createTheme({ palette: { mode: 'dark' } });\n\n"
        "function Pricing() {\n  return <Card />;\n}"
    )
    result = normalize(raw, "react-mui")

    assert not result.is_fallback
    assert "function GeneratedComponent() {" in result.text
    assert "const THEME = createTheme(" in result.text


def test_picker_import_is_added_for_react_native():
    result = normalize(UNIMPORTED_PICKER, "react-native")

    assert not result.is_fallback
    assert result.text.startswith(
        "import React from 'react';\n"
        "import { View } from 'react-native';\n"
        "import { Picker } from '@react-native-picker/picker';\n"
    )
    assert "function App() {" in result.text


def test_flutter_page_is_wrapped_in_material_app():
    result = normalize(FLUTTER_PAGE, "flutter")

    assert not result.is_fallback
    assert result.component_name == "LoginPage"
    assert result.text.endswith("void main() {\n  runApp(MaterialApp(home: LoginPage()));\n}\n")


@pytest.mark.parametrize("code_format", list(CodeFormat))
def test_whitespace_output_falls_back_to_previewable_placeholder(code_format):
    result = normalize("  \n\t", code_format)

    assert result.is_fallback
    assert result.fallback_reason == "empty model output"
    assert result.code_format == code_format

    resource = build_preview(result)
    assert resource.code_format == code_format
    assert resource.url or resource.bundle_files
