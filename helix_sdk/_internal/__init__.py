"""Internal modules for Helix SDK.

These are not intended for direct use in application code.

Modules:
    query - Query string and body encoding
    envelope - Response envelope parsing and status classification
    http - Transport capability and httpx implementations
    redaction - Credential redaction for debug output
"""
