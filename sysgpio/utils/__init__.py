"""Configuration loading and constants."""
