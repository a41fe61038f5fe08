"""SSGBridge command-line interface."""
