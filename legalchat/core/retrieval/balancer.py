"""
Quota balancing across jurisdictions.

A plain top-k over several jurisdictions can starve the less similar ones.
Candidates are grouped by jurisdiction and each jurisdiction that has any
candidate receives a quota of ``k // n`` items (``n`` = jurisdictions with
candidates); the first ``k % n`` in request order get one extra. A second
pass fills any shortfall with leftovers beyond each quota, walking the same
order again.

Dependencies: None (pure domain logic)
System role: Fair redistribution step of balanced retrieval
"""

from legalchat.boundary.vdb.vector_schemas import SearchHit


def fetch_sizes(
    jurisdiction_count: int,
    k: int,
    per_jurisdiction: int = 10,
    max_fetch: int = 50,
    min_candidates: int = 10,
) -> tuple[int, int]:
    """
    Widened candidate counts for the similarity query.

    Args:
        jurisdiction_count: Number of requested jurisdictions
        k: Caller's target result count
        per_jurisdiction: Base candidates per jurisdiction
        max_fetch: Cap on the base fetch size
        min_candidates: Floor on raw candidates when several jurisdictions are requested

    Returns:
        tuple[int, int]: (fetch_size, raw_candidate_count)
    """
    if jurisdiction_count <= 1:
        return k, k
    fetch = min(per_jurisdiction * jurisdiction_count, max_fetch)
    return fetch, max(fetch * jurisdiction_count, min_candidates)


def compute_quotas(available: list[str], k: int) -> dict[str, int]:
    """
    Per-jurisdiction quota for a target of k results.

    Args:
        available: Jurisdictions with candidates, in request order
        k: Target result count

    Returns:
        dict[str, int]: Quota per jurisdiction; quotas sum to k
    """
    n = len(available)
    if n == 0 or k <= 0:
        return {code: 0 for code in available}
    if k < n:
        # One each for the earliest jurisdictions
        return {code: 1 if i < k else 0 for i, code in enumerate(available)}
    per, remainder = max(1, k // n), k % n
    return {code: per + (1 if i < remainder else 0) for i, code in enumerate(available)}


def balance_results(hits: list[SearchHit], requested: list[str], k: int) -> list[SearchHit]:
    """
    Redistribute similarity hits fairly across requested jurisdictions.

    Args:
        hits: Raw hits ordered by similarity
        requested: Requested codes in first-detected order
        k: Target result count

    Returns:
        list[SearchHit]: At most k hits, grouped by jurisdiction in request order
            with leftovers appended; the first k raw hits when no requested
            jurisdiction has a hit
    """
    by_code: dict[str, list[SearchHit]] = {}
    for hit in hits:
        by_code.setdefault(hit.iso_code, []).append(hit)

    available = [code for code in requested if code in by_code]
    if not available:
        return hits[:k]

    quotas = compute_quotas(available, k)
    selected: list[SearchHit] = []
    for code in available:
        selected.extend(by_code[code][: quotas[code]])

    if len(selected) < k:
        for code in available:
            for hit in by_code[code][quotas[code]:]:
                if len(selected) >= k:
                    break
                selected.append(hit)

    return selected[:k]
