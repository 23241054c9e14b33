"""Activities app package: surf, yoga and leisure offerings shown on the website."""
