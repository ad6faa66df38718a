"""Services Layer — channel operation dispatch."""
