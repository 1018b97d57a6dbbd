from __future__ import annotations


def cors_kwargs(origins: list[str]) -> dict:
    # Read-only service: no credentials, only safe methods
    return {
        "allow_origins": origins,
        "allow_credentials": False,
        "allow_methods": ["GET", "HEAD", "OPTIONS"],
        "allow_headers": ["Content-Type", "X-Request-Id"],
        "expose_headers": ["X-Request-Id"],
    }
