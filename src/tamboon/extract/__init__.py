"""
Extract Layer - File I/O

This layer turns the encrypted input into donation records.
- Streams the Rot128 file through the decoder to disk
- Reads the decoded CSV into Polars / pydantic records
- No gateway calls, no aggregation
"""
