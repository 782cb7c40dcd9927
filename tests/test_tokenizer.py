from postquery.query.tokenizer import Token, tokenize


def test_tokenize_basic():
    tokens = tokenize('"machine learning" fast api')
    assert tokens == [
        Token("machine learning", was_quoted=True),
        Token("fast"),
        Token("api"),
    ]


def test_tokenize_empty_and_blank():
    assert tokenize("") == []
    assert tokenize("   \t\n ") == []


def test_unterminated_quote_is_literal():
    tokens = tokenize('say "hello world')
    assert [t.text for t in tokens] == ["say", '"hello', "world"]
    assert not any(t.was_quoted for t in tokens)


def test_quoted_directive_keeps_spaces():
    tokens = tokenize('"author:John Smith" report')
    assert tokens[0] == Token("author:John Smith", was_quoted=True)
    assert tokens[1].text == "report"


def test_round_trip_with_balanced_quotes():
    raw = '  "traffic stop"   author:jdoe    "vehicle break-in" x '
    tokens = tokenize(raw)
    assert " ".join(t.raw() for t in tokens) == " ".join(raw.split())
