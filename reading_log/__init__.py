"""
Reading Log Application Package

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine, sessions and table provisioning
- main.py: FastAPI application factory and configuration
- dependencies.py: Dependency injection functions
- catalog/: derivation and query rules of the reading log
- models/: SQLAlchemy ORM models
- schemas/: Pydantic request/response schemas
- routers/: API route handlers
- services/: ingestion, notifications, backups, rate limiting
"""

__version__ = "0.1.0"
