DESCRIPTION_PROMPT = """
Analyze this UI design image and describe it precisely enough to recreate it in code.

Cover, from top-left, row by row:

1. Layout structure (header, main content, sidebars, footer, grids and columns)
2. Components (buttons, inputs, forms, cards, navigation, lists, tables, dialogs)
3. Color scheme with hex codes for backgrounds, text, buttons, borders and accents
4. Typography (font family or a close web-safe match, sizes, weights, alignment)
5. Spacing, padding, margins, border radii and shadows, estimated in pixels
6. Interactive elements, their purpose and their states (hover, focus, disabled)
7. All visible text exactly as shown, including placeholders and labels
8. How the layout should adapt to smaller or larger screens

Return a structured plain-text description. Do not write any code.
"""

SYSTEM_PROMPT = """
You are an expert UI developer who recreates designs as production-ready code.
Your code must:
1. Match colors, spacing, typography and text content of the description
2. Implement interactive states and behaviors
3. Be accessible and responsive
4. Be returned as clean, executable source only, without markdown fences or explanations
"""

CODE_TEMPLATE = """
{intro}

UI Description:
{ui_description}

User Requirements:
{user_prompt}

Device Type: {device_type}

Requirements:
{requirements}
"""

INTROS = {
    "react-mui": "Generate a complete React component using Material-UI (@mui/material) that recreates this UI.",
    "react-native": "Generate a complete React Native component for Expo Snack that recreates this UI.",
    "flutter": "Generate a complete Flutter app in Dart for DartPad that recreates this UI.",
}

REQUIREMENTS = {
    "react-mui": """\
1. The main component MUST be named "GeneratedComponent" and exported ONCE at the very end: "export default GeneratedComponent;"
2. Put all React and Material-UI imports at the top, e.g.
   import React, { useState, useEffect } from 'react';
   import { Box, Typography, Button } from '@mui/material';
   import { Brightness4, Brightness7 } from '@mui/icons-material';
3. Use only @mui/material and @mui/icons-material components; style with the sx prop, not styled-components
4. Make the layout responsive with Material-UI breakpoints or useMediaQuery for {device_type} and other screen sizes
5. Add aria-label or role attributes to every interactive element
6. Inline sub-components inside GeneratedComponent; do not declare other top-level components
7. Use placeholder images from https://placehold.co, never local paths
8. Include loading and error states where the UI implies them
9. Do not wrap the answer in markdown code fences; return only the JavaScript code""",
    "react-native": """\
1. The main component MUST be named "App" and exported ONCE at the very end: "export default App;"
2. Import React and every React Native core component you use, e.g.
   import React, { useState } from 'react';
   import { View, Text, StyleSheet, SafeAreaView } from 'react-native';
3. Use React Native core components and Expo-compatible packages only (@expo/vector-icons, @react-native-picker/picker)
4. Style with StyleSheet.create; make the layout responsive for {device_type} screens with Dimensions or useWindowDimensions
5. Add accessible, accessibilityLabel and accessibilityHint props to interactive elements
6. Use placeholder images from https://placehold.co
7. Do not wrap the answer in markdown code fences; return only the JavaScript code""",
    "flutter": """\
1. Start with "import 'package:flutter/material.dart';" and include exactly one "void main() { runApp(const MyApp()); }"
2. The root widget MUST be a class named "MyApp" that returns a MaterialApp with a ThemeData
3. Use Material widgets only; no packages other than the Flutter SDK
4. Make the layout responsive with MediaQuery or LayoutBuilder for {device_type} and other screen sizes
5. Wrap meaningful elements in Semantics widgets for accessibility
6. Use StatefulWidget where the UI has state; use NetworkImage with https://placehold.co for images
7. Do not wrap the answer in markdown code fences; return only the Dart code""",
}

DEFAULT_USER_PROMPTS = {
    "react-mui": "Create a faithful, functional Material-UI component based on the UI description.",
    "react-native": "Create a faithful, functional React Native screen based on the UI description.",
    "flutter": "Create a faithful, functional Flutter app based on the UI description.",
}

REFINE_TEMPLATE = """
The {code_format} code below was generated for this UI but is missing required properties:

{issues}

UI Description:
{ui_description}

Previous code:
{previous_code}

Return the complete corrected code. Keep every original requirement:
{requirements}
"""
