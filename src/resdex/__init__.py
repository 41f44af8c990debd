"""resdex: hierarchical documentation resource index."""
