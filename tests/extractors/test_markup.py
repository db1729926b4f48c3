"""Tests for the template region and tag scanner."""

from __future__ import annotations

from compdoc.extractors.markup import extract_template_region, iter_tags


def test_region_balances_nested_templates() -> None:
    text = (
        "<template>\n"
        "  <div>\n"
        '    <template v-if="open"><slot name="a" /></template>\n'
        "    <slot />\n"
        "  </div>\n"
        "</template>\n"
        "<script setup>\nconst x = '</template>';\n</script>\n"
    )
    region = extract_template_region(text)
    assert region is not None
    assert region.strip().startswith("<div>")
    assert region.strip().endswith("</div>")
    assert "<slot />" in region


def test_region_missing_self_closing_and_unterminated() -> None:
    assert extract_template_region("<script>export default {}</script>") is None
    assert extract_template_region("<template />") == ""
    assert extract_template_region("<template><div><slot /></div>") == "<div><slot /></div>"


def test_iter_tags_skips_quoted_values_comments_and_interpolations() -> None:
    markup = (
        '<div title="a > b" :class="{ on: x > 1 }">'
        "<!-- <slot name=\"hidden\" /> -->"
        "{{ a < b ? '<slot>' : '' }}"
        "<slot name=one disabled />"
        "</div>"
    )
    tags = list(iter_tags(markup))
    assert [(tag.name, tag.closing) for tag in tags] == [
        ("div", False),
        ("slot", False),
        ("div", True),
    ]
    div, slot, _ = tags
    assert div.attributes == (("title", "a > b"), (":class", "{ on: x > 1 }"))
    assert slot.attributes == (("name", "one"), ("disabled", None))
    assert slot.self_closing is True


def test_iter_tags_treats_script_body_as_raw_text() -> None:
    markup = "<script>if (a <b) { render('<slot />') }</script><slot />"
    names = [tag.name for tag in iter_tags(markup) if not tag.closing]
    assert names == ["script", "slot"]
