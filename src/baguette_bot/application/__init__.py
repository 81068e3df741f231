"""
Application Layer

Orchestrates domain objects and infrastructure ports.

Structure:
- services/: session registry, playback session actor, fetch retry policy
- interfaces/: Port interfaces for infrastructure adapters
"""
