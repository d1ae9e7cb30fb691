"""Login theme storage, discovery and activation."""
