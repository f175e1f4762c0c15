"""Runtime configuration and observability."""
