"""Command line interface for chatsafe."""
