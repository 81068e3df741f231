"""Baguette Bot - a Discord bot that plays YouTube audio from a per-guild queue."""
