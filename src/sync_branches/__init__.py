"""Open and update pull requests that keep branches in sync."""
