"""Infrastructure layer - Discord and yt-dlp integration."""
