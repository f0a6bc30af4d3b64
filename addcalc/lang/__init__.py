"""Variables, sessions, error reporting and the interactive shell."""
