import re

# Anything that is not a (Unicode) letter or whitespace. \W keeps digits and
# underscores, so those are listed explicitly.
_NON_LETTER_PATTERN = re.compile(r"[\W\d_]+", flags=re.UNICODE)
_WHITESPACE_PATTERN = re.compile(r"\s+")

MIN_TOKEN_LENGTH = 2


def tokenize(text: str | None) -> set[str]:
    """Split an expense label into its distinct lowercase word tokens.

    Punctuation, digits and symbols are dropped (not treated as separators),
    accented letters are kept, and tokens shorter than two characters are
    ignored.
    """
    if not text:
        return set()

    lowered = text.lower()
    words = _WHITESPACE_PATTERN.split(lowered)
    tokens = {_NON_LETTER_PATTERN.sub("", word) for word in words}
    return {t for t in tokens if len(t) >= MIN_TOKEN_LENGTH}
