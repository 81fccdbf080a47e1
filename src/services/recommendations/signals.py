"""Signal aggregation: user actions -> weighted TMDB genre scores."""

from collections import defaultdict
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from src.models.schemas import (
    Content,
    GenrePreference,
    UserCollections,
    UserGenrePreference,
    UserSignals,
    UserVotedContent,
)
from src.services.recommendations.genres import DEFAULT_CATALOG, GenreCatalog
from src.services.recommendations.weights import (
    GENRE_OPINION_SIGNALS,
    SIGNAL_WEIGHTS,
    VOTE_SIGNALS,
    SignalKind,
    SignalWeight,
)


@dataclass(frozen=True)
class GenreSignal:
    """One contribution to a TMDB genre's score."""

    genre_id: int
    weight: float
    counts_toward_sample_size: bool


def _content_signals(
    items: Iterable[Content],
    kind: SignalKind,
    weights: Mapping[SignalKind, SignalWeight],
) -> Iterator[GenreSignal]:
    # Duplicate tags on one item are counted each time
    rule = weights[kind]
    for item in items:
        for genre_id in item.genre_ids:
            yield GenreSignal(genre_id, rule.weight, rule.counts_toward_sample_size)


def _genre_preference_signals(
    preferences: Iterable[UserGenrePreference],
    catalog: GenreCatalog,
    weights: Mapping[SignalKind, SignalWeight],
) -> Iterator[GenreSignal]:
    for pref in preferences:
        genre = catalog.find_genre(pref.genre_id)
        if genre is None:
            continue
        rule = weights[GENRE_OPINION_SIGNALS[pref.preference]]
        # A TMDB id present in both movie and TV ids is scored twice
        for genre_id in genre.all_ids:
            yield GenreSignal(genre_id, rule.weight, False)


def _vote_signals(
    votes: Iterable[UserVotedContent],
    weights: Mapping[SignalKind, SignalWeight],
) -> Iterator[GenreSignal]:
    for vote in votes:
        if not vote.genre_ids:
            continue
        rule = weights[VOTE_SIGNALS[vote.vote]]
        if rule.weight == 0:
            continue
        for genre_id in vote.genre_ids:
            yield GenreSignal(genre_id, rule.weight, rule.counts_toward_sample_size)


def collect_signals(
    signals: UserSignals,
    catalog: GenreCatalog = DEFAULT_CATALOG,
    weights: Mapping[SignalKind, SignalWeight] = SIGNAL_WEIGHTS,
) -> list[GenreSignal]:
    """Flatten every signal source into per-genre contributions."""
    collected: list[GenreSignal] = []
    collected.extend(_genre_preference_signals(signals.genre_preferences, catalog, weights))
    collected.extend(_content_signals(signals.liked, SignalKind.LIKED, weights))
    collected.extend(_content_signals(signals.watchlist, SignalKind.WATCHLIST, weights))
    collected.extend(_content_signals(signals.collection_items, SignalKind.COLLECTION, weights))
    collected.extend(_content_signals(signals.hidden, SignalKind.HIDDEN, weights))
    collected.extend(_vote_signals(signals.voted_content, weights))
    return collected


def aggregate_signals(
    signals: Iterable[GenreSignal],
) -> tuple[dict[int, float], dict[int, int]]:
    """Sum weights and positive-sample counts per TMDB genre id."""
    scores: dict[int, float] = defaultdict(float)
    counts: dict[int, int] = defaultdict(int)
    for signal in signals:
        scores[signal.genre_id] += signal.weight
        if signal.counts_toward_sample_size:
            counts[signal.genre_id] += 1
    return dict(scores), dict(counts)


def calculate_genre_preferences(
    signals: UserSignals,
    catalog: GenreCatalog = DEFAULT_CATALOG,
    weights: Mapping[SignalKind, SignalWeight] = SIGNAL_WEIGHTS,
) -> list[GenrePreference]:
    """Score TMDB genres from every user signal.

    Only genres with a positive score are returned, highest score first.
    Ties keep the order in which genres were first seen.
    """
    scores, counts = aggregate_signals(collect_signals(signals, catalog, weights))

    preferences = [
        GenrePreference(
            genre_id=genre_id,
            genre_name=catalog.external_genre_name(genre_id),
            score=score,
            count=counts.get(genre_id, 0),
        )
        for genre_id, score in scores.items()
        if score > 0
    ]
    preferences.sort(key=lambda p: p.score, reverse=True)
    return preferences


def enrich_votes_with_genres(
    votes: Iterable[UserVotedContent],
    collections: UserCollections,
) -> list[UserVotedContent]:
    """Attach genre ids to title-quiz votes.

    Votes only carry a content id, so genre tags are looked up on any item
    with the same id and media type in the user's collections. Votes for
    titles the user has nowhere else keep whatever genre ids they came with.
    """
    genre_map: dict[tuple[int, str], list[int]] = {}
    for item in _all_items(collections):
        if item.genre_ids:
            genre_map[(item.id, item.media_type)] = item.genre_ids

    return [
        vote.model_copy(
            update={"genre_ids": genre_map.get((vote.content_id, vote.media_type), vote.genre_ids)}
        )
        for vote in votes
    ]


def _all_items(collections: UserCollections) -> Iterator[Content]:
    yield from collections.liked
    yield from collections.watchlist
    yield from collections.collection_items
    yield from collections.hidden
