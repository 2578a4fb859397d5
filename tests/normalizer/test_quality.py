from screen2code.normalizer import check_quality, normalize


def test_accessible_responsive_component_passes(accessible_output):
    report = check_quality(normalize(accessible_output, "react-mui"))
    assert report.ok
    assert report.issues == []


def test_missing_properties_are_listed(react_mui_output):
    report = check_quality(normalize(react_mui_output, "react-mui"))

    assert not report.ok
    assert report.issues == [
        "accessibility attributes (aria-label or role)",
        "responsive design (useMediaQuery or breakpoints)",
    ]


def test_breakpoint_object_counts_as_responsive():
    code = normalize(
        "function GeneratedComponent() {\n"
        "  return <Box role=\"main\" sx={{ width: { xs: '100%', md: 600 } }} />;\n"
        "}\n"
        "export default GeneratedComponent;",
        "react-mui",
    )
    assert check_quality(code).ok


def test_react_native_checks():
    code = normalize(
        "function App() {\n"
        "  const { width } = useWindowDimensions();\n"
        "  return <View accessibilityLabel=\"Card\" style={{ width }} />;\n"
        "}",
        "react-native",
    )
    assert check_quality(code).ok


def test_flutter_checks():
    code = normalize(
        "class MyApp extends StatelessWidget {\n"
        "  Widget build(BuildContext context) {\n"
        "    return MaterialApp(home: Text('Hi'));\n"
        "  }\n"
        "}",
        "flutter",
    )
    report = check_quality(code)
    assert report.issues == [
        "accessibility support (Semantics widgets or labels)",
        "responsive design (MediaQuery or LayoutBuilder)",
    ]


def test_fallback_is_a_single_issue():
    report = check_quality(normalize("no code here", "react-mui"))
    assert report.issues == [
        "a usable component (output could not be normalized: no component definition found)"
    ]
