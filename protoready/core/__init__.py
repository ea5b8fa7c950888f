"""Settings, logging, constants and service errors shared by every package."""
