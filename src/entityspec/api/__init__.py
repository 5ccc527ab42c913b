"""Read models exposed to callers (e.g. as JSON response bodies)."""
