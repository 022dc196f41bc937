"""
Load Layer - Data Persistence

This layer handles all data persistence operations.
- DuckDB storage of groups and their postings
- Storage-level uniqueness of groups by Facebook id
- No business logic, just I/O operations
"""
