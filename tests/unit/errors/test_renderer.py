"""
Tests for MessageRenderer — translation first, sorted trailer otherwise.
"""

from __future__ import annotations

import random

from faultline.errors.renderer import MessageRenderer, untranslated_message
from faultline.i18n import CatalogTranslator


class _ExplodingTranslator:
    def translate(self, code, params):
        raise RuntimeError("catalog backend down")


class _RecordingTranslator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def translate(self, code, params):
        self.calls.append((code, dict(params)))
        return code


class TestUntranslatedMessage:
    def test_no_params_is_bare_code(self):
        assert untranslated_message("ERR_X", {}) == "ERR_X"

    def test_sorted_trailer(self):
        msg = untranslated_message("ERR_X", {"__B__": "2", "__A__": "1"})
        assert msg == "ERR_X, __A__ => 1, __B__ => 2"


class TestMessageRenderer:
    def test_untranslated_with_params(self):
        renderer = MessageRenderer()
        params = renderer.prepare({"filename": "a.txt"})
        assert renderer.render("ERR_FILE_MISSING", params) == "ERR_FILE_MISSING, __FILENAME__ => a.txt"

    def test_untranslated_without_params(self):
        assert MessageRenderer().render("ERR_X", {}) == "ERR_X"
        assert MessageRenderer().render("ERR_X") == "ERR_X"

    def test_insertion_order_never_changes_output(self):
        renderer = MessageRenderer()
        items = [(f"k{i}", str(i)) for i in range(12)]
        expected = renderer.render("ERR_X", renderer.prepare(dict(items)))
        rng = random.Random(7)
        for _ in range(20):
            rng.shuffle(items)
            assert renderer.render("ERR_X", renderer.prepare(dict(items))) == expected

    def test_translation_is_final(self):
        translator = CatalogTranslator({"ERR_FILE_MISSING": "File __FILENAME__ is missing"})
        renderer = MessageRenderer(translator)
        params = renderer.prepare({"FILENAME": "a.txt"})
        assert renderer.render("ERR_FILE_MISSING", params) == "File a.txt is missing"

    def test_translator_sees_bracketed_params(self):
        translator = _RecordingTranslator()
        renderer = MessageRenderer(translator)
        renderer.render("ERR_X", renderer.prepare({"user": "bob"}))
        assert translator.calls == [("ERR_X", {"__USER__": "bob"})]

    def test_failing_translator_treated_as_not_found(self):
        renderer = MessageRenderer(_ExplodingTranslator())
        assert renderer.render("ERR_X", {"__A__": "1"}) == "ERR_X, __A__ => 1"

    def test_prepare_merges_children_under_bracketed_errval(self):
        renderer = MessageRenderer()
        assert renderer.prepare({"a": "1"}, ["boom"]) == {"__A__": "1", "__ERRVAL__": "boom"}

    def test_prepare_appends_to_caller_supplied_errval(self):
        renderer = MessageRenderer()
        assert renderer.prepare({"errval": "first"}, ["second"]) == {"__ERRVAL__": "first second"}

    def test_custom_errval_key_is_bracketed(self):
        renderer = MessageRenderer(errval_key="cause")
        assert renderer.errval_key == "__CAUSE__"
        assert renderer.prepare({}, ["x"]) == {"__CAUSE__": "x"}

    def test_prepare_does_not_mutate_input(self):
        raw = {"a": "1"}
        MessageRenderer().prepare(raw, ["x"])
        assert raw == {"a": "1"}

    def test_empty_catalog_kept(self):
        translator = CatalogTranslator()
        renderer = MessageRenderer(translator)
        assert renderer.translator is translator
        translator.add("ERR_X", "now translated")
        assert renderer.render("ERR_X", {}) == "now translated"
