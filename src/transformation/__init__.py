"""
Transformation Layer - Pure, Deterministic Functions

This layer contains all business logic and data transformations.
- Pure functions (input → output)
- No I/O operations
- Unit testable
- Deterministic results
"""
