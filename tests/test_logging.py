import io
import json
import logging

from postquery.common.logging import setup_logging


def test_json_lines_carry_extras():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    buf = io.StringIO()
    try:
        setup_logging("debug", stream=buf)
        logging.getLogger("postquery.query.filters").debug(
            "directive_ignored", extra={"directive": "origin", "value": "fax"}
        )
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)

    line = json.loads(buf.getvalue().strip().splitlines()[-1])
    assert line["level"] == "DEBUG"
    assert line["logger"] == "postquery.query.filters"
    assert line["msg"] == "directive_ignored"
    assert line["directive"] == "origin"
    assert line["value"] == "fax"
    assert "lineno" not in line
