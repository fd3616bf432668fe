"""Storage widths for best-effort request metadata."""

ADDRESS_MAX_LENGTH = 100
USER_AGENT_MAX_LENGTH = 500
