"""In-memory room registry for the real-time session server."""
