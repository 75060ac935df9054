"""
Services Package

The I/O around the catalog core:
- ingestion.py: derive, store and announce a new book
- notifications.py: book.created events on a Redis pub/sub channel
- redis_client.py: shared Redis connection
- backup.py: semicolon-separated catalog snapshots
- rate_limiter.py: Rate limiting with slowapi and Redis backend
"""
