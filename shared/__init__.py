"""
Shared utilities for the GitHub clients.

This package aggregates common building blocks consumed by both client layers:

- config: Client configuration via pydantic-settings
- logging: Structured logging with trace correlation
- tracing: OpenTelemetry tracing config
- errors: Canonical error types and responses
- ensure: Argument guards for public client methods

Do not import from github_api or github_reactive into shared/.
"""
