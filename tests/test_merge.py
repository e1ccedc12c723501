import io
import os
import unittest
from contextlib import redirect_stderr
from unittest import mock

from htmangl import apply, dump, merge_markup, parse, render
from htmangl.merge import Merger

EMPTY = "<html><head></head><body></body></html>"


class TestApply(unittest.TestCase):
    def assert_merge(self, base, applied, expected):
        assert merge_markup(base, applied) == expected

    def test_apply_empty(self):
        self.assert_merge(
            "<html><head></head><body><h1>Hey</h1></body></html>",
            "",
            "<html><head></head><body><h1>Hey</h1></body></html>",
        )

    def test_apply_empty_with_doctype(self):
        self.assert_merge(
            "<!DOCTYPE html><html><head></head><body><h1>Hey</h1></body></html>",
            "",
            "<!DOCTYPE html><html><head></head><body><h1>Hey</h1></body></html>",
        )

    def test_applied_to_empty(self):
        self.assert_merge(
            "",
            "<html><head></head><body><h1>Bye</h1></body></html>",
            "<html><head></head><body><h1>Bye</h1></body></html>",
        )

    def test_applied_to_something(self):
        self.assert_merge(
            "<html><head></head><body><h1>Hello</h1></body></html>",
            "<html><head></head><body><h1>Bye</h1></body></html>",
            "<html><head></head><body><h1>HelloBye</h1></body></html>",
        )

    def test_matched_text_nodes_stay_siblings(self):
        merged = apply(parse("<h1>Hello</h1>"), parse("<h1>Bye</h1>"))
        assert dump(merged) == "\n".join(
            [
                "| <html>",
                "|   <head>",
                "|   <body>",
                "|     <h1>",
                '|       "Hello"',
                '|       "Bye"',
            ]
        )

    def test_new_element(self):
        self.assert_merge(
            "<html><head></head><body><h1>Hello</h1></body></html>",
            "<html><head></head><body><p>Bye</p></body></html>",
            "<html><head></head><body><h1>Hello</h1><p>Bye</p></body></html>",
        )

    def test_inserted_element(self):
        self.assert_merge(
            "<html><head></head><body><header>HEADER</header><!-- htmangl:insert --><footer>FOOTER</footer></body></html>",
            "<html><head></head><body><p>CONTENT</p></body></html>",
            "<html><head></head><body><header>HEADER</header><p>CONTENT</p><footer>FOOTER</footer></body></html>",
        )

    def test_matched_element_after_insert_marker_stays_after(self):
        self.assert_merge(
            "<html><head></head><body><!-- htmangl:insert --><footer>F</footer></body></html>",
            "<html><head></head><body><footer>X</footer><p>C</p></body></html>",
            "<html><head></head><body><p>C</p><footer>FX</footer></body></html>",
        )

    def test_copy_elements(self):
        self.assert_merge(
            '<html><head><link rel="a" href="b"/><!-- htmangl:copy --></head><body><h1>Hello </h1></body></html>',
            '<html><head><link rel="c" href="d"/></head><body><h1>Bye</h1></body></html>',
            '<html><head><link rel="a" href="b"><link rel="c" href="d"></head><body><h1>Hello Bye</h1></body></html>',
        )

    def test_copy_keeps_base_children_shallow(self):
        self.assert_merge(
            "<html><head><title>T</title><!-- htmangl:copy --></head><body></body></html>",
            '<html><head><meta charset="utf-8"></head><body></body></html>',
            '<html><head><title></title><meta charset="utf-8"></head><body></body></html>',
        )

    def test_copy_stops_the_walk(self):
        self.assert_merge(
            "<html><head><!-- htmangl:copy --><title>T</title></head><body></body></html>",
            '<html><head><meta charset="utf-8"></head><body></body></html>',
            '<html><head><title></title><meta charset="utf-8"></head><body></body></html>',
        )

    def test_copy_readds_matched_children(self):
        self.assert_merge(
            '<html><head><meta name="a"><!-- htmangl:copy --></head><body></body></html>',
            '<html><head><meta name="b"><style>x</style></head><body></body></html>',
            '<html><head><meta name="a"><meta name="b"><style>x</style></head><body></body></html>',
        )

    def test_example(self):
        self.assert_merge(
            '<html lang="en"><head><meta charset="utf-8" /><title>My website</title>'
            '<link rel="stylesheet" href="css/screen.css" type="text/css" /></head>'
            "<body><header><h1>My website</h1></header><!-- htmangl:insert -->"
            "<footer>Copyright me (this year)</footer></body></html>",
            '<html><head><title> - Home</title></head><body><img src="hero"/>'
            "<p>This is my website, welcome.</p></body></html>",
            '<html lang="en"><head><meta charset="utf-8"><title>My website - Home</title>'
            '<link rel="stylesheet" href="css/screen.css" type="text/css"></head>'
            "<body><header><h1>My website</h1></header><img src=\"hero\">"
            "<p>This is my website, welcome.</p><footer>Copyright me (this year)</footer></body></html>",
        )

    def test_only_last_duplicate_applied_tag_is_matched(self):
        self.assert_merge(
            "<html><head></head><body><p>A</p></body></html>",
            "<html><head></head><body><p>1</p><p>2</p></body></html>",
            "<html><head></head><body><p>A2</p></body></html>",
        )

    def test_duplicate_base_tags_are_processed_independently(self):
        self.assert_merge(
            "<html><head></head><body><p>A</p><p>B</p></body></html>",
            "<html><head></head><body><p>1</p></body></html>",
            "<html><head></head><body><p>A1</p><p>B</p></body></html>",
        )

    def test_applied_doctype_is_shadowed_by_html_element(self):
        self.assert_merge(
            "<html><head></head><body><h1>Hello</h1></body></html>",
            "<!DOCTYPE html><html><head></head><body><p>Bye</p></body></html>",
            "<html><head></head><body><h1>Hello</h1><p>Bye</p></body></html>",
        )

    def test_base_comments_are_kept(self):
        self.assert_merge(
            "<html><head></head><body><!-- note --><h1>A</h1></body></html>",
            "<html><head></head><body><h1>B</h1></body></html>",
            "<html><head></head><body><!-- note --><h1>AB</h1></body></html>",
        )

    def test_directive_match_is_case_sensitive(self):
        self.assert_merge(
            "<html><head></head><body><!-- HTMANGL:insert --><footer>F</footer></body></html>",
            "<html><head></head><body><p>C</p></body></html>",
            "<html><head></head><body><!-- HTMANGL:insert --><footer>F</footer><p>C</p></body></html>",
        )

    def test_attributes_come_from_base(self):
        self.assert_merge(
            '<html><head></head><body><div class="base">A</div></body></html>',
            '<html><head></head><body><div class="applied">B</div></body></html>',
            '<html><head></head><body><div class="base">AB</div></body></html>',
        )

    def test_nested_insert_marker(self):
        self.assert_merge(
            "<html><head></head><body><main><h2>Top</h2><!-- htmangl:insert --><hr></main></body></html>",
            "<html><head></head><body><main><p>Text</p></main></body></html>",
            "<html><head></head><body><main><h2>Top</h2><p>Text</p><hr></main></body></html>",
        )

    def test_template_contents_merge(self):
        self.assert_merge(
            "<html><head><template><p>A</p></template></head><body></body></html>",
            "<html><head><template><p>B</p></template></head><body></body></html>",
            "<html><head><template><p>AB</p></template></head><body></body></html>",
        )


class TestProperties(unittest.TestCase):
    DOCS = [
        EMPTY,
        "<!DOCTYPE html><html><head><title>x</title></head><body><p>Hi</p></body></html>",
        '<html lang="en"><head></head><body><div id="a"><!-- c --><span>s</span>t</div></body></html>',
    ]
    PLAIN_DOCS = [
        EMPTY,
        "<html><head><title>x</title></head><body><p>Hi</p></body></html>",
        '<html><head></head><body><div id="a"><!-- c --><span>s</span>t</div></body></html>',
    ]

    def test_identity_on_empty_apply(self):
        for markup in self.DOCS:
            assert render(apply(parse(markup), parse(""))) == render(parse(markup))

    def test_identity_on_empty_base(self):
        # The empty base contributes a bare <html>, so applied documents here carry
        # no doctype and no <html> attributes.
        for markup in self.PLAIN_DOCS:
            assert render(apply(parse(""), parse(markup))) == render(parse(markup))

    def test_empty_apply_is_idempotent(self):
        for markup in self.DOCS:
            once = apply(parse(markup), parse(""))
            twice = apply(once, parse(""))
            assert render(twice) == render(parse(markup))

    def test_empty_apply_drops_markers_at_walked_levels(self):
        base = "<html><head></head><!-- htmangl:insert --><body><p>x</p></body></html>"
        merged = apply(parse(base), parse(""))
        assert render(merged) == "<html><head></head><body><p>x</p></body></html>"

    def test_inputs_are_consumed(self):
        base = parse("<h1>Hello</h1>")
        applied = parse("<p>Bye</p>")
        merged = apply(base, applied)
        assert merged is not base
        assert merged is not applied
        assert render(merged) == "<html><head></head><body><h1>Hello</h1><p>Bye</p></body></html>"


class TestDebug(unittest.TestCase):
    def test_debug_traces_decisions(self):
        err = io.StringIO()
        with redirect_stderr(err):
            Merger(debug=True).apply(parse("<h1>Hello</h1><!-- htmangl:insert -->"), parse("<p>Bye</p>"))
        trace = err.getvalue()
        assert "[match] html" in trace
        assert "[insert-marker]" in trace
        assert "[append] p" in trace

    def test_debug_from_environment(self):
        with mock.patch.dict(os.environ, {"HTMANGL_DEBUG": "1"}):
            assert Merger().env_debug is True
        with mock.patch.dict(os.environ, {"HTMANGL_DEBUG": ""}):
            assert Merger().env_debug is False

    def test_no_trace_by_default(self):
        err = io.StringIO()
        with mock.patch.dict(os.environ, {"HTMANGL_DEBUG": ""}), redirect_stderr(err):
            apply(parse("<h1>Hello</h1>"), parse("<p>Bye</p>"))
        assert err.getvalue() == ""


if __name__ == "__main__":
    unittest.main()
