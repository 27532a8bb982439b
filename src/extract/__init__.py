"""
Extract Layer - Pure I/O to External APIs

This layer handles all external data fetching with no business logic.
- No imports from transform or load layers
- Functions that return raw records or flat DataFrames
- Errors from the API are propagated, never retried
"""
