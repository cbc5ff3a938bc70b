"""
Shared utilities for incremental offset services

Provides:
- logging: structured logging setup and formatters
- tracing: OpenTelemetry tracer setup and span helpers
- database_types: driver-specific parameter conventions
"""

__version__ = "1.0.0"
__all__ = ["logging", "tracing", "database_types"]
