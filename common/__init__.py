"""Core conversion engine and shared UI helpers for the M3 to Snowflake converter."""
