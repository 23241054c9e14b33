"""API-key protected endpoints consumed by the WordPress booking widget plugin."""
