"""Developer tools for checking provider clients against live APIs."""
