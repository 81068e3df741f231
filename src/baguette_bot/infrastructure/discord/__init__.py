"""Discord integration: bot, voice, control surface, cogs and views."""
