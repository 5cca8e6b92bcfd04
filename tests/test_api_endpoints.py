import logging
from pathlib import Path

from fastapi.testclient import TestClient
import pytest

from api_main import app
from vibecheck.api.state import get_session, set_session, set_view
from vibecheck.core import AudioFeatureSet, PlaybackStatus
from vibecheck.insights import VibeSummary
from vibecheck.preview import PlaybackSession
from vibecheck.spotify import SpotifyAPIError, SpotifyTokenMissing

from fakes import FakeAudioFactory, FakeResolver, make_track

client = TestClient(app)

TRACKS = [
    make_track("a", preview_url="https://preview/a.mp3", features=AudioFeatureSet(energy=0.3, valence=0.6)),
    make_track("b", features=AudioFeatureSet(energy=0.9, valence=0.1)),
    make_track("c"),
]


@pytest.fixture
def factory(monkeypatch):
    audio = FakeAudioFactory()
    resolver = FakeResolver({"a": "https://preview/a.mp3", "b": "https://search/b.m4a"})
    set_session(PlaybackSession(resolver, audio))
    set_view(None)

    monkeypatch.setattr(
        "vibecheck.api.playlists.routes.load_spotify_token",
        lambda: {"access_token": "token-123"},
    )
    monkeypatch.setattr(
        "vibecheck.api.playlists.routes.load_playlist_with_features",
        lambda token_info, playlist_id: list(TRACKS),
    )

    yield audio

    get_session().teardown()
    set_session(None)
    set_view(None)


def _open(playlist_id: str = "pl1", **params):
    response = client.get(f"/playlists/{playlist_id}", params=params)
    assert response.status_code == 200
    return response.json()


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_open_playlist_returns_rows_and_idle_playback(factory) -> None:
    data = _open()

    assert data["playlist_id"] == "pl1"
    assert data["sort"] == "default"
    assert [t["id"] for t in data["tracks"]] == ["a", "b", "c"]
    assert data["tracks"][0]["has_preview_url"] is True
    assert data["tracks"][0]["features"]["energy"] == 0.3
    assert data["tracks"][2]["features"] is None
    assert data["playback"] == {
        "status": "idle",
        "track_id": None,
        "volume": 0.5,
        "notice": None,
    }


def test_open_playlist_with_energy_sort(factory) -> None:
    data = _open(sort="energy")

    assert data["sort"] == "energy"
    assert [t["id"] for t in data["tracks"]] == ["b", "a", "c"]


def test_invalid_sort_is_rejected(factory) -> None:
    response = client.get("/playlists/pl1", params={"sort": "loudness"})

    assert response.status_code == 422


def test_select_plays_then_toggles(factory) -> None:
    _open()

    response = client.post("/playback/select", json={"track_id": "a"})
    assert response.status_code == 200
    assert response.json()["status"] == "playing"
    assert response.json()["track_id"] == "a"

    rows = _open()["tracks"]
    assert rows[0]["is_current"] and rows[0]["is_playing"]
    assert not rows[1]["is_current"]

    paused = client.post("/playback/select", json={"track_id": "a"}).json()
    assert paused["status"] == "paused"
    assert len(factory.handles) == 1
    assert factory.handles[0].paused


def test_select_logs_track_and_artists(factory, caplog) -> None:
    _open()

    with caplog.at_level(logging.INFO, logger="vibecheck"):
        client.post("/playback/select", json={"track_id": "a"})

    assert "Preview selection: Track a by Test Artist" in caplog.text


def test_select_switches_tracks_with_single_resource(factory) -> None:
    _open()

    client.post("/playback/select", json={"track_id": "a"})
    data = client.post("/playback/select", json={"track_id": "b"}).json()

    assert data["status"] == "playing"
    assert data["track_id"] == "b"
    assert [h.url for h in factory.live] == ["https://search/b.m4a"]
    assert factory.overlaps == 0


def test_select_without_preview_reports_unavailable(factory) -> None:
    _open()

    data = client.post("/playback/select", json={"track_id": "c"}).json()

    assert data["status"] == "unavailable"
    assert data["notice"] == "No preview available for this track."
    assert factory.handles == []


def test_select_requires_open_playlist_and_known_track(factory) -> None:
    response = client.post("/playback/select", json={"track_id": "a"})
    assert response.status_code == 404

    _open()
    response = client.post("/playback/select", json={"track_id": "zzz"})
    assert response.status_code == 404


def test_volume_is_clamped_and_used_for_next_track(factory) -> None:
    _open()

    assert client.post("/playback/volume", json={"volume": 0.2}).json()["volume"] == 0.2
    client.post("/playback/select", json={"track_id": "a"})
    assert factory.handles[0].volume == 0.2

    assert client.post("/playback/volume", json={"volume": 3}).json()["volume"] == 1.0
    assert factory.handles[0].volume == 1.0


def test_teardown_releases_resource(factory) -> None:
    _open()
    client.post("/playback/select", json={"track_id": "a"})

    data = client.post("/playback/teardown").json()

    assert data["status"] == "idle"
    assert factory.live == []
    assert client.get("/playback").json()["status"] == "idle"


def test_opening_another_playlist_stops_playback(factory) -> None:
    _open("pl1")
    client.post("/playback/select", json={"track_id": "a"})

    data = _open("pl2")

    assert data["playback"]["status"] == "idle"
    assert factory.live == []


def test_missing_token_returns_401_and_resets_session(factory, monkeypatch) -> None:
    _open()
    client.post("/playback/select", json={"track_id": "a"})

    def raise_missing():
        raise SpotifyTokenMissing("Spotify authorization required.")

    monkeypatch.setattr("vibecheck.api.playlists.routes.load_spotify_token", raise_missing)

    response = client.get("/playlists")

    assert response.status_code == 401
    detail = response.json()["detail"]
    assert detail["status"] == "unauthenticated"
    assert detail["auth_url"].startswith("https://accounts.spotify.com/authorize")
    assert get_session().status == PlaybackStatus.IDLE
    assert factory.live == []


def test_upstream_failure_returns_502(factory, monkeypatch) -> None:
    def failing_loader(token_info, playlist_id):
        raise SpotifyAPIError("Failed to fetch playlist tracks (HTTP 500).", status_code=500)

    monkeypatch.setattr(
        "vibecheck.api.playlists.routes.load_playlist_with_features", failing_loader
    )

    response = client.get("/playlists/pl1")

    assert response.status_code == 502
    assert response.json()["detail"]["upstream_status"] == 500


def test_list_playlists(factory, monkeypatch) -> None:
    monkeypatch.setattr(
        "vibecheck.api.playlists.routes.list_user_playlists",
        lambda token_info: [{"id": "pl1", "name": "Gym", "tracks_total": 3}],
    )

    response = client.get("/playlists")

    assert response.status_code == 200
    assert response.json()[0]["name"] == "Gym"
    assert response.json()[0]["description"] == ""


def test_chart_points(factory) -> None:
    _open()

    response = client.get("/playlists/pl1/chart")

    assert response.status_code == 200
    assert response.json() == [
        {"index": 0, "energy": 0.3, "valence": 0.6},
        {"index": 1, "energy": 0.9, "valence": 0.1},
    ]


def test_vibe_is_summarized_once_per_view(factory, monkeypatch) -> None:
    calls = []

    class StubSummarizer:
        def summarize(self, descriptions):
            calls.append(list(descriptions))
            return VibeSummary(vibe="Moody.", tags=["Dark"], suggested_artists=["Portishead"])

    monkeypatch.setattr("vibecheck.views.GeminiVibeSummarizer", StubSummarizer)
    _open()

    first = client.post("/playlists/pl1/vibe")
    second = client.post("/playlists/pl1/vibe")

    assert first.status_code == 200
    assert first.json() == {
        "playlist_id": "pl1",
        "vibe": "Moody.",
        "tags": ["Dark"],
        "suggested_artists": ["Portishead"],
    }
    assert second.json() == first.json()
    assert len(calls) == 1


def test_vibe_requires_open_playlist(factory) -> None:
    response = client.post("/playlists/other/vibe")

    assert response.status_code == 404


def test_auth_status_without_token(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(
        "vibecheck.config.SPOTIFY_TOKEN_FILE", str(tmp_path / "token.json"), raising=True
    )

    response = client.get("/auth/status")

    assert response.status_code == 200
    assert response.json()["authenticated"] is False
