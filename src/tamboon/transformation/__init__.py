"""
Transformation Layer - Pure, Deterministic Functions

Schemas and aggregation for donation records.
- Pure functions (input → output)
- No I/O operations
- Unit testable
"""
