"""Usage snippets for components, rendered from a Jinja2 template."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader

from ..models import PropDefinition, SlotDefinition

TEMPLATE_NAME = "usage.vue.j2"
MAX_PROPS = 3
MAX_NAMED_SLOTS = 2


def prop_attribute(prop: PropDefinition) -> Optional[str]:
    """Render one prop as an attribute with a placeholder value, or ``None`` to skip it."""
    if prop.type == "boolean":
        return prop.name
    if prop.valid_values:
        return f'{prop.name}="{prop.valid_values[0]}"'
    if prop.type == "string":
        return f'{prop.name}="example"'
    return None


class UsageExampleRenderer:
    """Renders a short single-file-component snippet showing how to use a component."""

    def __init__(
        self,
        tag_prefix: str = "Spr",
        import_package: str = "design-system-next",
        templates_dir: Path | None = None,
    ) -> None:
        self.tag_prefix = tag_prefix
        self.import_package = import_package
        directory = templates_dir or Path(__file__).with_name("templates")
        self._env = Environment(
            loader=FileSystemLoader(str(directory)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(
        self,
        pascal_name: str,
        props: Sequence[PropDefinition] = (),
        slots: Sequence[SlotDefinition] = (),
    ) -> str:
        # Props without a default, or with an enumerated set of values.
        candidates = [prop for prop in props if not prop.default or prop.valid_values]
        attributes = [
            attribute
            for attribute in (prop_attribute(prop) for prop in candidates[:MAX_PROPS])
            if attribute
        ]
        named: List[Dict[str, str]] = [
            {
                "name": slot.name,
                "scope": ", ".join(slot.scope_props or []) if slot.scoped else "",
            }
            for slot in slots
            if slot.name != "default"
        ][:MAX_NAMED_SLOTS]
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            tag=f"{self.tag_prefix}{pascal_name}",
            attributes=attributes,
            has_default=any(slot.name == "default" for slot in slots),
            named_slots=named,
            import_package=self.import_package,
        )


def generate_usage_example(
    pascal_name: str,
    props: Sequence[PropDefinition] = (),
    slots: Sequence[SlotDefinition] = (),
) -> str:
    return UsageExampleRenderer().render(pascal_name, props, slots)


__all__ = ["UsageExampleRenderer", "generate_usage_example", "prop_attribute"]
