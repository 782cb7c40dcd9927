from __future__ import annotations

from dataclasses import dataclass, field

from .tokenizer import unquoted_texts


@dataclass(frozen=True)
class HighlightTerms:
    phrases: list[str] = field(default_factory=list)
    words: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.phrases and not self.words

    def flat(self) -> list[str]:
        return [*self.phrases, *self.words]


def classify(free_text: str) -> HighlightTerms:
    phrases: list[str] = []
    words: list[str] = []
    for term in unquoted_texts(free_text):
        term = term.strip()
        # leftover directive fragments are never highlighted
        if not term or ":" in term:
            continue
        if " " in term:
            phrases.append(term)
        else:
            words.append(term)
    return HighlightTerms(phrases=phrases, words=words)
