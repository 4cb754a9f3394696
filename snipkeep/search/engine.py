"""Relevance scoring and reordering of snippets.

A query is a comma-separated list of terms. Matching is case-insensitive
(everything is uppercased). For every term, a snippet gains one point per
enabled field that matches:

- title: term is a substring of the title
- tags: term equals one of the comma-separated tags exactly
- code: term is a substring of the code or of any supplement's code
- notes: term is a substring of the notes or of any supplement's notes

Points are summed over all terms and fields.

Two different notions of "empty" are used and must not be conflated:
the trimmed raw query decides visibility and ordering, while the filtered
term list decides scoring. A query like " , ," is therefore non-empty,
scores nothing and hides every snippet.
"""

from snipkeep.snippets.models import Snippet
from snipkeep.snippets.ordering import sort_snippets

from .models import SearchOutcome, SearchParameters


def tokenize_query(query: str) -> list[str]:
    """Split a raw query into trimmed, uppercased, non-empty terms.

    Examples:
        "regex, Parse" -> ["REGEX", "PARSE"]
        " , " -> []
    """
    terms = [term.strip() for term in query.strip().upper().split(",")]
    return [term for term in terms if term]


def is_in_title(term: str, snippet: Snippet) -> bool:
    return term in snippet.title.upper()


def is_in_tags(term: str, snippet: Snippet) -> bool:
    return any(tag.upper() == term for tag in snippet.tag_list())


def is_in_code(term: str, snippet: Snippet) -> bool:
    return term in snippet.code.upper() or any(
        term in supplement.code.upper() for supplement in snippet.supplements
    )


def is_in_notes(term: str, snippet: Snippet) -> bool:
    return term in snippet.notes.upper() or any(
        term in supplement.notes.upper() for supplement in snippet.supplements
    )


def score_snippets(
    snippets: list[Snippet], params: SearchParameters, terms: list[str]
) -> dict[str, int]:
    """Accumulate a relevance score per snippet id.

    Args:
        snippets: Collection to score.
        params: Which fields take part in scoring.
        terms: Tokenized query terms.

    Returns:
        Mapping of snippet id to score. Every snippet is present when
        there is at least one term; the mapping is empty otherwise.
    """
    scores: dict[str, int] = {}

    for term in terms:
        for snippet in snippets:
            score = scores.get(snippet.id, 0)
            if params.title and is_in_title(term, snippet):
                score += 1
            if params.tags and is_in_tags(term, snippet):
                score += 1
            if params.code and is_in_code(term, snippet):
                score += 1
            if params.notes and is_in_notes(term, snippet):
                score += 1
            scores[snippet.id] = score

    return scores


def search_snippets(
    snippets: list[Snippet], params: SearchParameters
) -> SearchOutcome:
    """Score, flag and reorder snippets in place for a search.

    With a non-empty query, showing snippets come first ordered by
    descending score; ties keep their previous relative order. With an
    empty query every snippet is shown and the default cascade order is
    restored.

    Args:
        snippets: The full collection; mutated and reordered in place.
        params: The search request.

    Returns:
        SearchOutcome with the terms, scores and number of matches.
    """
    query = params.query.strip()
    terms = tokenize_query(query)
    scores = score_snippets(snippets, params, terms)

    for snippet in snippets:
        snippet.showing = scores.get(snippet.id, 0) > 0 or len(query) == 0

    if query:
        # Hidden snippets all tie with each other; showing ones rank by score
        snippets.sort(
            key=lambda s: (not s.showing, -scores.get(s.id, 0) if s.showing else 0)
        )
    else:
        sort_snippets(snippets)

    return SearchOutcome(
        terms=terms,
        scores=scores,
        matched=sum(1 for s in snippets if s.showing),
    )
