"""Configuration: settings, constants, Redis connection and logging setup."""
