"""Compiled-in fallback catalog used when neither cache nor remote yield entries."""

from __future__ import annotations

import copy
from typing import Final

BUILTIN_CATALOG: Final[tuple[dict[str, object], ...]] = (
    {
        "id": "builtin-button",
        "name": "Button",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["action", "pressable", "interactive"],
        "dependencies": [],
        "description": "Clickable action control with variants for different use cases.",
        "notes": "Use primary for main actions, secondary for supporting actions.",
        "previewKind": "button",
        "propsSpec": [
            {
                "name": "label",
                "label": "Button Text",
                "kind": "text",
                "default": "Button",
                "required": True,
                "description": "The text displayed on the button",
            },
            {
                "name": "variant",
                "label": "Variant",
                "kind": "select",
                "options": ["primary", "secondary", "destructive"],
                "default": "primary",
                "description": "Visual style variant",
            },
            {
                "name": "disabled",
                "label": "Disabled",
                "kind": "boolean",
                "default": False,
                "description": "Whether the button is disabled",
            },
        ],
        "demo": {"props": {"label": "Primary Button", "variant": "primary", "disabled": False}},
    },
    {
        "id": "builtin-input",
        "name": "Text Field",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["form", "input", "text"],
        "dependencies": [],
        "description": "Single-line text input for forms and data entry.",
        "notes": "Pair with a label and validation state for accessibility.",
        "previewKind": "input",
        "propsSpec": [
            {
                "name": "placeholder",
                "label": "Placeholder",
                "kind": "text",
                "default": "Enter text...",
                "description": "Placeholder text shown when the input is empty",
            },
            {
                "name": "error",
                "label": "Error State",
                "kind": "boolean",
                "default": False,
                "description": "Whether to show error styling",
            },
        ],
        "demo": {"props": {"placeholder": "Enter your text...", "error": False}},
    },
    {
        "id": "builtin-label",
        "name": "Label",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["form", "label", "accessibility"],
        "dependencies": [],
        "description": "Form label with consistent styling.",
        "notes": "Always use with form controls for accessibility.",
        "previewKind": "label",
    },
    {
        "id": "builtin-badge",
        "name": "Badge",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["label", "status", "indicator"],
        "dependencies": [],
        "description": "Small status indicator or label for categorization.",
        "notes": "Keep badge text concise.",
        "previewKind": "badge",
        "propsSpec": [
            {
                "name": "text",
                "label": "Text",
                "kind": "text",
                "default": "New",
                "required": True,
                "description": "The text displayed in the badge",
            },
            {
                "name": "variant",
                "label": "Variant",
                "kind": "select",
                "options": ["default", "secondary", "destructive"],
                "default": "default",
                "description": "Visual style variant",
            },
        ],
        "demo": {"props": {"text": "New", "variant": "default"}},
    },
    {
        "id": "builtin-chip",
        "name": "Chip",
        "level": "atom",
        "version": "1.0.0",
        "status": "draft",
        "tags": ["tag", "filter", "selection"],
        "dependencies": [],
        "description": "Interactive tag-like element for selections or filters.",
        "notes": "Can be removable or selectable.",
        "previewKind": "chip",
        "propsSpec": [
            {
                "name": "label",
                "label": "Label",
                "kind": "text",
                "default": "Chip",
                "required": True,
            },
            {"name": "selected", "label": "Selected", "kind": "boolean", "default": False},
            {"name": "removable", "label": "Removable", "kind": "boolean", "default": False},
        ],
        "demo": {"props": {"label": "Design System", "selected": False, "removable": True}},
    },
    {
        "id": "builtin-checkbox",
        "name": "Checkbox",
        "level": "atom",
        "version": "1.0.0",
        "status": "draft",
        "tags": ["form", "boolean", "selection"],
        "dependencies": [],
        "description": "Binary selection control for forms.",
        "notes": "Consider indeterminate states for parent-child relationships.",
        "previewKind": "checkbox",
        "demo": {"props": {"label": "Enable notifications", "checked": False}},
    },
    {
        "id": "builtin-switch",
        "name": "Switch",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["form", "toggle", "boolean"],
        "dependencies": [],
        "description": "Toggle switch for on/off states.",
        "notes": "Use for settings and preferences that apply immediately.",
        "previewKind": "switch",
    },
    {
        "id": "builtin-divider",
        "name": "Divider",
        "level": "atom",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["layout", "separator", "visual"],
        "dependencies": [],
        "description": "Visual separator line.",
        "notes": "Use to separate content sections.",
        "previewKind": "divider",
    },
    {
        "id": "builtin-searchbar",
        "name": "Search Bar",
        "level": "molecule",
        "version": "1.0.0",
        "status": "draft",
        "tags": ["search", "compose", "form"],
        "dependencies": ["builtin-input", "builtin-button"],
        "description": "Composite search input with clear functionality.",
        "notes": "Consider debouncing for live search.",
        "previewKind": "searchbar",
        "demo": {"props": {"placeholder": "Search components...", "showClear": True}},
    },
    {
        "id": "builtin-form-row",
        "name": "Form Row",
        "level": "molecule",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["form", "compose", "field"],
        "dependencies": ["builtin-label", "builtin-input"],
        "description": "Complete form field with label, input, and help text.",
        "notes": "Provides consistent field layout with spacing and error states.",
        "previewKind": "form-row",
        "demo": {"props": {"label": "Email Address", "invalid": False}},
    },
    {
        "id": "builtin-alert",
        "name": "Alert",
        "level": "molecule",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["feedback", "notification", "message"],
        "dependencies": ["builtin-button"],
        "description": "Alert message with icon and action.",
        "notes": "Use for important notifications.",
        "previewKind": "alert",
    },
    {
        "id": "builtin-toolbar",
        "name": "Toolbar",
        "level": "organism",
        "version": "1.0.0",
        "status": "ready",
        "tags": ["layout", "actions", "navigation"],
        "dependencies": ["builtin-button", "builtin-searchbar", "builtin-divider"],
        "description": "Action toolbar grouping buttons and search.",
        "notes": "Use for grouped actions and controls above content.",
        "previewKind": "toolbar",
    },
)


def builtin_payloads() -> list[dict[str, object]]:
    """Return a private copy of the compiled-in catalog payloads."""

    return copy.deepcopy(list(BUILTIN_CATALOG))
