"""Application services for per-guild playback."""
