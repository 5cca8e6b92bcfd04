"""HTTP API exposing playlists, playback and vibe summaries to the UI."""
