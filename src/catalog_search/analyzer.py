"""
Search Text Analyzer (Shared Kernel)

Turns free text into normalized search tokens.
Used both by the index builder and by the query engine, so documents and
queries always tokenize identically.
"""

import re

MIN_TOKEN_LENGTH = 2
TOKEN_DELIMITER = ";"

STOP_WORDS = frozenset(
    "a about after all also an and any are as at be because been but by can "
    "could do does each for from get had has have he her his how i if in into "
    "is it its just me more most my no nor not of on one only or other our out "
    "own she should so some such than that the their them then there these "
    "they this those through to too up us use used uses using very was we were "
    "what when where which while who whom why will with would you your".split()
)

# Letters and digits only; "_" counts as a separator
_WORD_SPLIT = re.compile(r"[\W_]+")

_FENCE = re.compile(r"^\s*(```|~~~).*$", re.MULTILINE)
_IMAGE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK = re.compile(r"\[([^\]]*)\]\([^)]*\)")
# Only known elements count as markup; "a < b", "x => y" and "Array<string>" stay text
_HTML_ELEMENTS = (
    "a abbr b blockquote br code dd del details div dl dt em figcaption figure "
    "h1 h2 h3 h4 h5 h6 hr i img ins kbd li mark ol p pre q s samp small span "
    "strong sub summary sup table tbody td th thead tr u ul var"
).split()
_HTML_TAG = re.compile(
    r"</?(?:" + "|".join(_HTML_ELEMENTS) + r")\b"
    r"(?:\s+[\w:-]+(?:=(?:\"[^\"]*\"|'[^']*'|[^\s\"'>]+))?)*\s*/?>",
    re.IGNORECASE,
)
_LINE_MARKER = re.compile(r"^\s{0,3}(#{1,6}|>+|[-*+]|\d+\.)\s+", re.MULTILINE)
# Replaced by a space so "width*height" splits like the raw text does
_EMPHASIS = re.compile(r"(\*{1,3}|~~|`+)")


class SearchAnalyzer:
    def __init__(
        self,
        min_length: int = MIN_TOKEN_LENGTH,
        stop_words: frozenset[str] = STOP_WORDS,
    ):
        self.min_length = min_length
        self.stop_words = stop_words

    def tokenize(self, text: str) -> list[str]:
        """
        Tokenize text into lowercase, deduplicated search tokens.

        Tokens keep their first-occurrence order. Words shorter than
        ``min_length`` and stop words are dropped. Never raises: any string
        reduces to a (possibly empty) token list.
        """
        if not text or not text.strip():
            return []

        tokens: list[str] = []
        seen: set[str] = set()
        for word in _WORD_SPLIT.split(text.lower()):
            if len(word) < self.min_length or word in self.stop_words:
                continue
            if word in seen:
                continue
            seen.add(word)
            tokens.append(word)
        return tokens

    def strip_markdown(self, text: str) -> str:
        """Remove markdown and inline HTML syntax, keeping the readable text."""
        if not text:
            return ""

        stripped = _FENCE.sub(" ", text)
        stripped = _IMAGE.sub(r"\1", stripped)
        stripped = _LINK.sub(r"\1", stripped)
        stripped = _HTML_TAG.sub(" ", stripped)
        stripped = _LINE_MARKER.sub("", stripped)
        stripped = _EMPHASIS.sub(" ", stripped)
        return " ".join(stripped.split())


# Global instance
analyzer = SearchAnalyzer()


def tokenize(text: str) -> list[str]:
    return analyzer.tokenize(text)


def strip_markdown(text: str) -> str:
    return analyzer.strip_markdown(text)


def join_tokens(tokens: list[str]) -> str:
    """Join tokens for compact storage in the index artifact."""
    return TOKEN_DELIMITER.join(tokens)


def split_tokens(value: str) -> list[str]:
    if not value:
        return []
    return [t for t in value.split(TOKEN_DELIMITER) if t]
