"""Report orchestration services."""
