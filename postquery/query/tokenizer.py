from __future__ import annotations

import re
from dataclasses import dataclass

# A quote only opens a phrase when a closing quote follows; otherwise it is
# swallowed by the bare-word alternative.
_TOKEN_RE = re.compile(r'"([^"]+)"|\S+')


@dataclass(frozen=True)
class Token:
    text: str
    was_quoted: bool = False

    def raw(self) -> str:
        return f'"{self.text}"' if self.was_quoted else self.text


def tokenize(text: str) -> list[Token]:
    tokens: list[Token] = []
    for m in _TOKEN_RE.finditer(text or ""):
        phrase = m.group(1)
        if phrase is not None:
            tokens.append(Token(text=phrase, was_quoted=True))
        else:
            tokens.append(Token(text=m.group(0)))
    return tokens


def unquoted_texts(text: str) -> list[str]:
    return [t.text for t in tokenize(text)]
