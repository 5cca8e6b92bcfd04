from enum import Enum
from typing import Iterable, List, Union

from vibecheck.core import Track


class SortKey(str, Enum):
    DEFAULT = "default"
    ENERGY = "energy"
    DANCEABILITY = "danceability"
    TEMPO = "tempo"


def feature_value(track: Track, name: str) -> float:
    """Numeric feature of a track; 0 when the track has no features or no value."""
    if track.features is None:
        return 0.0
    return track.features.get(name, default=0.0)


def sort_tracks(tracks: Iterable[Track], key: Union[SortKey, str]) -> List[Track]:
    """
    Order tracks for display.

    DEFAULT keeps the input order. Feature keys sort descending; ties keep
    their input order (sorted() is stable, also with reverse=True).
    Returns a new list; the input is never mutated.
    """
    sort_key = SortKey(key)
    ordered = list(tracks)

    if sort_key == SortKey.DEFAULT:
        return ordered

    return sorted(
        ordered,
        key=lambda t: feature_value(t, sort_key.value),
        reverse=True,
    )
