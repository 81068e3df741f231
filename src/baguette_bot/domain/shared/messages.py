"""Centralized message constants for error messages, log lines, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Track Validation Errors
    EMPTY_STREAM_URL = "Audio stream URL cannot be empty"
    TRACK_ALREADY_RESOLVED = "Track '{locator}' already has a resolved title"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Audio/Stream Errors
    NO_INFO_FOR_LOCATOR = "yt-dlp returned no info for {locator}"
    NO_AUDIO_FORMAT = "No playable audio format found for {locator}"
    NOT_A_PLAYLIST = "No playlist entries found at {url}"

    # Sink Errors
    SINK_NOT_CONNECTED = "Voice client is not connected"
    SINK_PLAY_FAILED = "Voice client refused the audio source"

    # Control Surface Errors
    CONTROL_SURFACE_FAILED = "Could not post or edit the now-playing message"

    # Authentication/Startup Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Voice/Audio Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_REUSED = "Reusing voice connection in guild %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_DISCONNECT_FAILED = "Failed to disconnect from voice in guild %s"

    # Sink
    SINK_PLAYING = "Sink started rendering in guild %s"
    SINK_STOPPED = "Sink stopped in guild %s"
    SINK_PAUSED = "Sink paused in guild %s"
    SINK_RESUMED = "Sink resumed in guild %s"
    SINK_TRACK_ENDED = "Sink finished an item in guild %s (error: %s)"
    SINK_NO_LISTENER = "No event listener set on sink for guild %s"
    SINK_STOP_FAILED = "Failed to stop sink in guild %s"

    # Fetching
    FETCH_ATTEMPT_FAILED = "Fetch attempt %d/%d failed for %s: %s"
    FETCH_EXHAUSTED = "Giving up on %s after %d attempts"
    FETCH_METADATA_FAILED = "Metadata fetch failed for %s: %s"
    FETCH_RESOLVED = "Fetched video info: %s"

    # Playback Session
    SESSION_CREATED = "Created playback session for guild %s"
    SESSION_REMOVED = "Removed playback session for guild %s"
    SESSION_STOPPED = "Stopped playback session for guild %s"
    SESSION_QUEUE_EMPTY = "Queue empty, leaving voice channel in guild %s"
    SESSION_ATTEMPTING = "Attempting to play %s in guild %s"
    SESSION_NOW_PLAYING = "Now playing '%s' in guild %s"
    SESSION_TRACK_DISCARDED = "Discarding %s in guild %s: %s"
    SESSION_TRACK_FINISHED = "Track finished: %s in guild %s"
    SESSION_SINK_ERROR = "Audio player error in guild %s: %s"
    SESSION_STALE_EVENT = "Ignoring stale sink event %s in guild %s (state=%s)"
    SESSION_ABANDONED_RENDER_EVENT = "Ignoring %s from abandoned render %s in guild %s (current=%s)"
    SESSION_ADVANCE_SKIPPED = "Advance requested in guild %s while %s, ignoring"
    SESSION_RESULT_DISCARDED = "Session for guild %s closed during fetch, discarding result"
    SESSION_ENQUEUED = "Enqueued %s at position %s in guild %s"
    SESSION_ENQUEUED_BATCH = "Enqueued %d tracks in guild %s"
    SESSION_TRANSPORT_RELEASE_FAILED = "Failed to release voice transport for guild %s"
    SESSION_WORKER_CRASHED = "Playback worker crashed in guild %s"
    CONTROL_SURFACE_UPDATE_FAILED = "Failed to update now-playing message in guild %s: %s"
    CONTROL_SURFACE_HTTP_ERROR = "Discord rejected now-playing message: %s"
    CONTROL_BUTTON_REJECTED = "Rejected %s button in guild %s: %s"
    SESSION_START_REJECTED = "Rejected new session in guild %s: %s"
    STARTING_MESSAGE_FAILED = "Could not post starting message in guild %s: %s"

    # Resolution
    YTDLP_EXTRACTING = "Extracting info for %s"
    YTDLP_FAILED_EXTRACT_PLAYLIST = "Failed to extract playlist from %s"
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"

    # Application Lifecycle
    BOT_STARTING = "Starting Baguette Bot (%s): %d fetch attempts, %.1fs retry delay, queue cap %s"
    FFMPEG_MISSING = "ffmpeg was not found on PATH; voice playback will fail until it is installed"
    BOT_SETUP = "Setting up bot..."
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %ss"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error stopping playback sessions: %s"
    BOT_READY = "David Baguetta is ready to drop beats as %s (%s)"
    BOT_CONNECTED_GUILDS = "Connected to %s guilds"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    NOW_PLAYING = "\U0001f3b6 Now playing: {title}"
    STARTING = "\U0001f3b6 Starting: {url}"
    STARTING_PLAYLIST = "\U0001f3b6 Starting playlist: {title} ({count} songs)"
    ADDED_TO_QUEUE = "Added to queue: {url}"
    ADDED_PLAYLIST = "Added {count} songs from playlist: {title}"

    ACTION_SKIPPED = "⏭️ Skipped!"
    ACTION_SKIPPED_REPLY = "Skipped the baguette beat!"
    ACTION_STOPPED = "⏹️ Stopped the music and cleared the queue."
    ACTION_PAUSED = "⏸️ Paused playback."
    ACTION_RESUMED = "▶️ Resumed playback."

    ERROR_INVALID_URL = "Invalid YouTube URL!"
    ERROR_INVALID_PLAYLIST = "Invalid playlist URL!"
    ERROR_EMPTY_PLAYLIST = "That playlist has no playable videos."
    ERROR_COULD_NOT_JOIN_VOICE = "I couldn't join your voice channel."
    ERROR_OCCURRED = "❌ An error occurred: {error}"

    STATE_NO_MUSIC = "No music playing!"
    STATE_NOTHING_PLAYING = "No song is currently playing."
    STATE_NOTHING_TO_STOP = "No music to stop."
    STATE_NOTHING_PAUSED = "Nothing is paused."
    STATE_MUST_BE_IN_VOICE = "You must be in a voice channel!"
    STATE_SERVER_ONLY = "This command can only be used in a server."


class EmojiConstants:
    """Emoji constants for consistent visual feedback."""

    PLAY_PAUSE = "⏯️"
    SKIP = "⏭️"
