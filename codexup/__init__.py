"""codex-1up — bootstrap a Codex CLI developer environment."""

__version__ = "0.1.0"
