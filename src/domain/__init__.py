"""
Domain layer for Firehose record transformation.

This layer contains:
- Data models (Firehose records and per-record results)
- Business logic (decode, redact, re-encode one record)
- Result types (explicit success/failure handling)
"""
