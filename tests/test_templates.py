"""Tests for LinkTemplate filter chains, rendering and the template registry."""

from __future__ import annotations

import logging

import pytest

from linkify.models import LinkData
from linkify.templates import (
    LinkTemplate,
    TemplateNotFoundError,
    TemplateRegistry,
)


def _upper(s: str) -> str:
    return s.upper()


def _exclaim(s: str) -> str:
    return s + "!"


def _strip(s: str) -> str:
    return s.strip()


# ===========================================================================
# Filter chains
# ===========================================================================

class TestFilterChains:
    def test_filters_for_all_excludes_field_filters(self) -> None:
        tpl = LinkTemplate("{{ text }}")
        tpl.add_filter("all", _strip).add_filter("url", _upper)
        assert tpl.filters_for("all") == [_strip]

    def test_field_filters_follow_all_filters_in_registration_order(self) -> None:
        tpl = LinkTemplate("{{ text }}")
        tpl.add_filter("url", _upper)
        tpl.add_filter("all", _strip)
        tpl.add_filter("url", _exclaim)
        tpl.add_filter("all", _upper)
        assert tpl.filters_for("url") == [_strip, _upper, _upper, _exclaim]
        assert tpl.filters_for("text") == [_strip, _upper]

    def test_unknown_field_has_no_filters(self) -> None:
        tpl = LinkTemplate("{{ text }}").add_filter("all", _strip)
        assert tpl.filters_for("title") == []

    def test_filters_for_returns_a_copy(self) -> None:
        tpl = LinkTemplate("{{ text }}").add_filter("all", _strip)
        tpl.filters_for("all").append(_upper)
        tpl.filters_for("text").append(_upper)
        assert tpl.filters_for("text") == [_strip]

    def test_invalid_field_warns_and_changes_nothing(self, caplog) -> None:
        tpl = LinkTemplate("{{ text }}").add_filter("text", _upper)
        with caplog.at_level(logging.WARNING, logger="linkify.templates"):
            result = tpl.add_filter("title", _exclaim)

        assert result is tpl
        assert tpl.filters_for("text") == [_upper]
        assert "unknown field" in caplog.text

    def test_non_callable_filter_warns_and_changes_nothing(self, caplog) -> None:
        tpl = LinkTemplate("{{ text }}").add_filter("all", _strip)
        with caplog.at_level(logging.WARNING, logger="linkify.templates"):
            tpl.add_filter("all", "not callable")

        assert tpl.filters_for("all") == [_strip]
        assert "non-callable" in caplog.text

    def test_filters_passed_to_constructor(self) -> None:
        tpl = LinkTemplate("{{ text }}", filters={"text": [_upper], "bogus": [_strip]})
        assert tpl.filters_for("text") == [_upper]

    def test_apply_filters_is_a_left_fold(self) -> None:
        tpl = LinkTemplate("{{ text }}")
        tpl.add_filter("all", _strip).add_filter("text", _exclaim).add_filter("text", _upper)
        assert tpl.apply_filters("text", "  hi ") == "HI!"


# ===========================================================================
# Rendering
# ===========================================================================

class TestRender:
    def test_markdown_renders_without_escaping(self) -> None:
        md = TemplateRegistry().resolve("markdown")
        assert md.render(LinkData("https://e.com/a", "Example")) == "[Example](https://e.com/a)"

    def test_markdown_keeps_special_characters_raw(self) -> None:
        md = TemplateRegistry().resolve("markdown")
        link = LinkData("https://e.com/a?x=1&y=2", "Tom & Jerry <3")
        assert md.render(link) == "[Tom & Jerry <3](https://e.com/a?x=1&y=2)"

    def test_html_escapes_description_not_url(self) -> None:
        html = TemplateRegistry().resolve("html")
        link = LinkData("https://e.com/a?x=1&y=2", "Text", 'Say "hi" & <bye>')
        assert html.render(link) == (
            '<a href="https://e.com/a?x=1&y=2" '
            'title="Say &#34;hi&#34; &amp; &lt;bye&gt;">Text</a>'
        )

    def test_html_new_tab(self) -> None:
        tpl = TemplateRegistry().resolve("htmlNewTab")
        out = tpl.render(LinkData("https://e.com/", "E"))
        assert out == '<a href="https://e.com/" title="E" target="_blank" rel="noopener">E</a>'

    def test_filters_applied_before_substitution(self) -> None:
        tpl = LinkTemplate("[{{ text|safe }}]({{ url|safe }}) {{ description }}")
        tpl.add_filter("all", _strip).add_filter("text", _upper).add_filter("description", _exclaim)
        out = tpl.render(LinkData(" https://e.com/a ", " hello ", " desc "))
        assert out == "[HELLO](https://e.com/a) desc!"

    def test_uri_fields_available(self) -> None:
        tpl = LinkTemplate(
            "{{ text|safe }} — {{ uri.hostname }}{% if uri.hasPath %}/…{% endif %}"
        )
        assert tpl.render(LinkData("https://www.e.com/a/b", "Post")) == "Post — www.e.com/…"
        assert tpl.render(LinkData("https://www.e.com/", "Home")) == "Home — www.e.com"

    def test_uri_fields_follow_filtered_url(self) -> None:
        tpl = LinkTemplate("{{ uri.hostname }}").add_filter("url", lambda u: u.replace("www.", ""))
        assert tpl.render(LinkData("https://www.e.com/")) == "e.com"

    def test_template_must_be_string(self) -> None:
        with pytest.raises(TypeError):
            LinkTemplate(None)


# ===========================================================================
# Registry
# ===========================================================================

class TestTemplateRegistry:
    def test_builtins_present(self) -> None:
        assert TemplateRegistry().names() == ["html", "htmlNewTab", "markdown"]

    def test_builtins_survive_custom_registrations(self) -> None:
        reg = TemplateRegistry()
        reg.register("plain", LinkTemplate("{{ url }}"))
        assert {"html", "htmlNewTab", "markdown"} <= set(reg.names())
        assert len(reg) == 4

    def test_register_and_resolve(self) -> None:
        reg = TemplateRegistry()
        tpl = LinkTemplate("{{ url }}")
        reg.register("plain", tpl)
        assert reg.resolve("plain") is tpl
        assert "plain" in reg

    def test_register_overwrites(self) -> None:
        reg = TemplateRegistry()
        tpl = LinkTemplate("{{ url }}")
        reg.register("html", tpl)
        assert reg.resolve("html") is tpl

    def test_unknown_name_raises_lookup_error(self) -> None:
        with pytest.raises(TemplateNotFoundError) as exc_info:
            TemplateRegistry().resolve("doesNotExist")
        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.name == "doesNotExist"

    def test_registries_do_not_share_builtin_instances(self) -> None:
        a, b = TemplateRegistry(), TemplateRegistry()
        a.resolve("html").add_filter("text", _upper)
        assert b.resolve("html").filters_for("text") == []

    @pytest.mark.parametrize("name", ["", None, 3])
    def test_invalid_name_raises(self, name) -> None:
        with pytest.raises(ValueError):
            TemplateRegistry().register(name, LinkTemplate("{{ url }}"))

    def test_non_template_raises(self) -> None:
        with pytest.raises(TypeError):
            TemplateRegistry().register("raw", "{{ url }}")
