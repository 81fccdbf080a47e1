"""Signal weights for genre scoring.

Each user action that says something about genre taste is a signal kind with
a signed weight. Negative signals lower a genre's score but never count
toward its sample size.
"""

from dataclasses import dataclass
from enum import Enum


class SignalKind(str, Enum):
    GENRE_LOVE = "genre_love"
    GENRE_NOT_FOR_ME = "genre_not_for_me"
    LIKED = "liked"
    WATCHLIST = "watchlist"
    COLLECTION = "collection"
    HIDDEN = "hidden"
    VOTE_LIKE = "vote_like"
    VOTE_DISLIKE = "vote_dislike"


@dataclass(frozen=True)
class SignalWeight:
    weight: float
    counts_toward_sample_size: bool


SIGNAL_WEIGHTS: dict[SignalKind, SignalWeight] = {
    # Explicit genre opinions apply to every TMDB id of the unified genre
    SignalKind.GENRE_LOVE: SignalWeight(5, False),
    SignalKind.GENRE_NOT_FOR_ME: SignalWeight(-5, False),
    # Per genre tag of the content item
    SignalKind.LIKED: SignalWeight(3, True),
    SignalKind.WATCHLIST: SignalWeight(1, True),
    SignalKind.COLLECTION: SignalWeight(1, True),
    SignalKind.HIDDEN: SignalWeight(-2, False),
    SignalKind.VOTE_LIKE: SignalWeight(4, True),
    SignalKind.VOTE_DISLIKE: SignalWeight(-3, False),
}

GENRE_OPINION_SIGNALS = {
    "love": SignalKind.GENRE_LOVE,
    "not_for_me": SignalKind.GENRE_NOT_FOR_ME,
}

VOTE_SIGNALS = {
    "like": SignalKind.VOTE_LIKE,
    "dislike": SignalKind.VOTE_DISLIKE,
}
