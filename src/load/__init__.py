"""
Load Layer - Data Persistence

This layer handles writing the assembled menu document.
- Local JSON files for development and snapshots
- No business logic, just I/O operations
"""
