"""Static component-to-category classification."""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

OTHER_CATEGORY = "other"

COMPONENT_CATEGORIES: Dict[str, List[str]] = {
    "form": [
        "button",
        "checkbox",
        "input",
        "radio",
        "select",
        "slider",
        "switch",
        "textarea",
        "file-upload",
        "date-picker",
        "time-picker",
    ],
    "layout": ["accordion", "card", "collapsible", "sidenav", "sidepanel", "tabs", "modal"],
    "data": [
        "avatar",
        "badge",
        "banner",
        "calendar",
        "calendar-cell",
        "chips",
        "empty-state",
        "list",
        "lozenge",
        "progress-bar",
        "status",
        "table",
        "audit-trail",
    ],
    "feedback": ["snackbar", "tooltip", "popper"],
    "navigation": ["dropdown", "stepper", "floating-action"],
    "filter": ["attribute-filter", "filter"],
    "utility": ["icon", "logo"],
}


def get_component_category(
    name: str, overrides: Optional[Mapping[str, Sequence[str]]] = None
) -> str:
    """Return the category of ``name``; configured overrides take precedence."""
    for table in (overrides or {}, COMPONENT_CATEGORIES):
        for category, names in table.items():
            if name in names:
                return category
    return OTHER_CATEGORY


__all__ = ["COMPONENT_CATEGORIES", "OTHER_CATEGORY", "get_component_category"]
