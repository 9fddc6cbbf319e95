# Audio and status feedback for Claude Code lifecycle hooks

__version__ = "1.0.2"
