"""Configuration and tracing."""
