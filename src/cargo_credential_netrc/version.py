"""Provider version."""

PROVIDER_VERSION = "0.3.0"

# Credential-process protocol versions this provider speaks
PROTOCOL_VERSIONS = (1,)

__all__ = ["PROVIDER_VERSION", "PROTOCOL_VERSIONS"]
