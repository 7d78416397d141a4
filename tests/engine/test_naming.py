"""Tests for Jinja2 name/description templating."""

from __future__ import annotations

import pytest

from petgen.engine.errors import GenerationError
from petgen.engine.hash_stream import HashStream
from petgen.engine.naming import choose_template, render
from petgen.ir.tables import TableSet


class TestRender:
    def test_interpolates(self) -> None:
        assert render("{{ color }} {{ type }}", color="Ruby", type="Phoenix") == "Ruby Phoenix"

    def test_strips_whitespace(self) -> None:
        assert render("  {{ x }}\n", x="Hi") == "Hi"

    def test_no_html_escaping(self) -> None:
        assert render("{{ x }}", x="Salt & Pepper") == "Salt & Pepper"

    def test_undefined_variable(self) -> None:
        with pytest.raises(GenerationError, match="cannot render"):
            render("{{ missing }}")

    def test_syntax_error(self) -> None:
        with pytest.raises(GenerationError):
            render("{{ unclosed")

    def test_offspring_parent_name_template(self) -> None:
        out = render(
            "{{ parent_a_name.split()[0] }} {{ parent_b_name.split()[0] }} Offspring",
            parent_a_name="Ember Drake",
            parent_b_name="Tide Serpent",
        )
        assert out == "Ember Tide Offspring"


class TestChooseTemplate:
    def test_consumes_one_slot(self) -> None:
        stream = HashStream("0" * 64)
        assert choose_template(stream, ["first", "second"]) == "first"
        assert stream.slot == 1

    def test_empty(self) -> None:
        with pytest.raises(GenerationError):
            choose_template(HashStream("0" * 64), [])

    def test_packaged_templates_render(self, tables: TableSet) -> None:
        context = dict(
            personality="Brave", type="Dragon", element="Fire", color="Ruby",
            habitat="Fire Realm", rarity="Epic", environment="Crystal Caves",
            parent_a_name="Ember Drake", parent_b_name="Tide Serpent",
        )
        t = tables.templates
        for source in t.creature + t.encounter + t.offspring + (t.encounter_description,):
            assert render(source, **context)
