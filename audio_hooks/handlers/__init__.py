"""
Hook entry points registered in Claude Code's settings.

Each module is run as a file by Claude Code, reads one JSON object from
stdin and exits: 0 on success, 1 on failure, 2 on unreadable input.
"""
