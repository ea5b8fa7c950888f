"""ProtoReady: production readiness assessment for AI-built prototypes."""

__version__ = "1.0.0"
