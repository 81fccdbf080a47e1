"""Merging of recommendation lists from different sources."""

from src.models.schemas import Content


def merge_recommendations(sources: list[list[Content]], limit: int) -> list[Content]:
    """Round-robin merge that drops ids already emitted.

    Takes the first item of every source, then the second of every source,
    and so on, so no single source dominates the head of the list. Stops at
    `limit` unique items or after ``limit * len(sources)`` steps.
    """
    if not sources or limit <= 0:
        return []

    seen: set[int] = set()
    merged: list[Content] = []
    max_iterations = limit * len(sources)

    for i in range(max_iterations):
        if len(merged) >= limit:
            break
        source = sources[i % len(sources)]
        item_index = i // len(sources)
        if item_index >= len(source):
            continue
        item = source[item_index]
        if item.id not in seen:
            seen.add(item.id)
            merged.append(item)

    return merged
