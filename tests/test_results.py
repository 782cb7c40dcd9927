from postquery.common.text import html_to_text
from postquery.highlight.renderer import Segment
from postquery.query.categories import CategoryRef, build_category_lookup
from postquery.query.filters import Origin, ParsedQuery
from postquery.query.interpreter import interpret, to_query_params
from postquery.query.terms import HighlightTerms
from postquery.results.highlighter import Post, PostHighlighter


def test_html_to_text():
    assert html_to_text("<p>Hello <b>World</b></p><script>alert(1)</script>") == "Hello World"
    assert html_to_text(None) == ""
    assert html_to_text("   ") == ""


def test_to_query_params_omits_defaults():
    assert to_query_params(ParsedQuery()) == {}
    params = to_query_params(
        ParsedQuery(free_text="robbery", author="", category_id="5", origin=Origin.WORDPRESS, mine_only=True)
    )
    assert params == {"search": "robbery", "category": "5", "origin": "wordpress", "mine": True}


def test_interpret_pipeline():
    lookup = build_category_lookup([CategoryRef("5", "Intel Quick Updates")])
    result = interpret(
        '"vehicle break-in" author:jdoe after:2024-10-01 origin:wordpress mine:true category:intel quick updates',
        categories=lookup,
    )
    assert result.query.free_text == '"vehicle break-in"'
    assert result.terms == HighlightTerms(phrases=["vehicle break-in"], words=[])
    assert result.params == {
        "search": "vehicle break-in",
        "author": "jdoe",
        "category": "5",
        "dateFrom": "2024-10-01",
        "origin": "wordpress",
        "mine": True,
    }


def test_post_highlighter_fields_and_count():
    terms = HighlightTerms(phrases=["traffic stop"], words=["stop"])
    post = Post(
        id=1,
        title="<h1>Routine traffic stop</h1>",
        excerpt=None,
        content="<p>Traffic stop, then another stop.</p><script>stop()</script>",
    )
    hp = PostHighlighter(terms, content_chars=0).highlight_post(post)
    assert hp.title == [Segment("Routine "), Segment("traffic stop", True)]
    assert hp.excerpt == [Segment("")]
    assert [s.text for s in hp.content if s.matched] == ["Traffic stop", "stop"]
    assert hp.content_matches == 3


def test_post_highlighter_truncates_preview():
    terms = HighlightTerms(words=["stop"])
    post = Post(id="a", title="t", content="stop here and stop there")
    hp = PostHighlighter(terms, content_chars=5, ellipsis="...").highlight_post(post)
    assert hp.content == [Segment("stop", True), Segment(" "), Segment("...")]
    # count covers the full body, not the preview
    assert hp.content_matches == 2


def test_search_param_drops_phrase_quotes():
    params = to_query_params(ParsedQuery(free_text='stolen "traffic stop" car'))
    assert params["search"] == "stolen traffic stop car"


def test_interpret_empty_input_drops_stale_search():
    result = interpret("", ParsedQuery(free_text="robbery", author="smith"))
    assert result.query.free_text == ""
    assert result.terms.is_empty()
    assert result.params == {"author": "smith"}
