from typing import Dict, List, Sequence

from vibecheck.core import Track
from vibecheck.preview.sorting import feature_value


def energy_valence_points(
    tracks: Sequence[Track], limit: int = 50
) -> List[Dict[str, float]]:
    """
    Data for the energy-flow and valence charts.

    Tracks without features are skipped; `index` is the position among the
    remaining tracks, in playlist order.
    """
    with_features = [t for t in tracks if t.features is not None]
    return [
        {
            "index": i,
            "energy": feature_value(t, "energy"),
            "valence": feature_value(t, "valence"),
        }
        for i, t in enumerate(with_features[:limit])
    ]
