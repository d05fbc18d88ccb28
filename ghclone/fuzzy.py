"""Ranking for the repository list's ``/`` filter.

An account rarely has more than a few hundred repositories, so the whole
list is re-ranked on every keystroke. Names that contain the query verbatim
always come before names that only contain its letters in order. Within
the verbatim group an earlier hit wins, then a shorter name.
"""

from __future__ import annotations

# Separators common in repository names; a hit right after one starts a word.
WORD_SEPARATORS = "-_. /"

RUN_BONUS = 20
RUN_STEP = 4
RUN_CAP = 16
GAP_PENALTY = 2
GAP_CAP = 40
WORD_START_BONUS = 35
LENGTH_DIVISOR = 5


def fuzzy_score(query: str, candidate: str) -> int | None:
    """Score the in-order letters of ``query`` found in ``candidate``.

    Runs of adjacent hits and hits at word starts (``go-tools`` -> ``t``)
    raise the score; skipped letters and long names lower it. Returns
    ``None`` when some letter of ``query`` is missing.
    """
    if not query:
        return 0
    name = candidate.casefold()

    score = 0
    last = -1
    streak = 0
    for letter in query.casefold():
        pos = name.find(letter, last + 1)
        if pos < 0:
            return None
        if pos == last + 1:
            streak += 1
            score += RUN_BONUS + min(RUN_CAP, streak * RUN_STEP)
        else:
            streak = 0
            score -= min(GAP_CAP, (pos - last - 1) * GAP_PENALTY)
        if pos == 0 or name[pos - 1] in WORD_SEPARATORS:
            score += WORD_START_BONUS
        last = pos
    return score - len(name) // LENGTH_DIVISOR


def fuzzy_match_labels(query: str, labels: list[str]) -> list[int]:
    """Return indices of the ``labels`` matching ``query``, best first.

    An empty query keeps every label in its original order.
    """
    if not query:
        return list(range(len(labels)))

    needle = query.casefold()
    verbatim: list[tuple[int, int, int]] = []
    for idx, label in enumerate(labels):
        pos = label.casefold().find(needle)
        if pos >= 0:
            verbatim.append((pos, len(label), idx))
    if verbatim:
        return [idx for _, _, idx in sorted(verbatim)]

    scattered: list[tuple[int, int, int]] = []
    for idx, label in enumerate(labels):
        score = fuzzy_score(query, label)
        if score is not None:
            scattered.append((-score, len(label), idx))
    return [idx for _, _, idx in sorted(scattered)]


__all__ = ["fuzzy_match_labels", "fuzzy_score"]
