"""Static configuration values for the admin plugin."""

PREFIX_MAX_LENGTH = 10
PREFIX_DISALLOWED_CHARS = {'"', "'", "`", "\n", "\r", "\t"}
