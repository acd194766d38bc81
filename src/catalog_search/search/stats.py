"""Search token statistics for content maintenance."""

from collections import Counter
from collections.abc import Iterable

from catalog_search.search.models import ContentType, IndexedDocument


def search_tokens_frequency(
    documents: Iterable[IndexedDocument], min_length: int = 3
) -> dict[str, int]:
    """
    Count in how many snippets each search token appears.

    Args:
        documents: Indexed documents (collections are ignored)
        min_length: Shortest token to count

    Returns:
        {token: count}, most frequent first (ties keep first appearance)
    """
    counts: Counter[str] = Counter()
    for doc in documents:
        if doc.type != ContentType.SNIPPET:
            continue
        counts.update(t for t in doc.search_tokens if len(t) >= min_length)

    return dict(sorted(counts.items(), key=lambda item: item[1], reverse=True))
