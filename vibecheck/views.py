"""Per-screen state for an opened playlist.

A PlaylistView holds what the playlist screen shows: the loaded tracks,
the chosen ordering and the vibe summary. Playback itself stays in the shared
PlaybackSession; the view only reads its snapshot. Opening a view and closing
it both tear the session down, the same as unmounting the previous screen.
"""

from typing import List, Optional, Sequence, Tuple, Union

from vibecheck.core import Track, log_info
from vibecheck.insights import (
    GeminiVibeSummarizer,
    VibeSummary,
    VibeSummaryError,
    describe_tracks,
)
from vibecheck.preview import (
    PlaybackSession,
    RowState,
    SortKey,
    row_state,
    sort_tracks,
)


class PlaylistView:
    def __init__(
        self,
        playlist_id: str,
        tracks: Sequence[Track],
        session: PlaybackSession,
        summarizer: Optional[GeminiVibeSummarizer] = None,
    ):
        self.playlist_id = playlist_id
        self.tracks: List[Track] = list(tracks)
        self.session = session
        self.sort_key = SortKey.DEFAULT
        self._summarizer = summarizer
        self._summary: Optional[VibeSummary] = None
        self._summary_error: Optional[VibeSummaryError] = None

    @classmethod
    def open(
        cls,
        playlist_id: str,
        tracks: Sequence[Track],
        session: PlaybackSession,
        summarizer: Optional[GeminiVibeSummarizer] = None,
    ) -> "PlaylistView":
        session.teardown()
        log_info(f"Opened playlist {playlist_id} ({len(tracks)} tracks).")
        return cls(playlist_id, tracks, session, summarizer)

    def close(self) -> None:
        self.session.teardown()

    def find_track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def set_sort(self, key: Union[SortKey, str]) -> SortKey:
        self.sort_key = SortKey(key)
        return self.sort_key

    def rows(self) -> List[Tuple[Track, RowState]]:
        snapshot = self.session.snapshot()
        return [
            (track, row_state(snapshot, track.id))
            for track in sort_tracks(self.tracks, self.sort_key)
        ]

    @property
    def summary(self) -> Optional[VibeSummary]:
        return self._summary

    def summarize_vibe(self) -> VibeSummary:
        """
        Summarize the playlist once; later calls return the stored outcome.

        The summarizer is invoked at most once per view. A failure is
        remembered and raised again until the playlist is reopened.
        """
        if self._summary is not None:
            return self._summary
        if self._summary_error is not None:
            raise self._summary_error
        if self._summarizer is None:
            self._summarizer = GeminiVibeSummarizer()

        try:
            self._summary = self._summarizer.summarize(describe_tracks(self.tracks))
        except VibeSummaryError as e:
            self._summary_error = e
            raise
        return self._summary
