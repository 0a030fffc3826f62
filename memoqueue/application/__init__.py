"""Application layer: ports shared by the memoizer facade and the CLI."""
