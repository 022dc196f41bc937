"""
Transformation Layer - Pure, Deterministic Functions

This layer contains the business rules applied to untrusted input and
fetched content.
- Pure functions (input -> output)
- No I/O operations
- Unit testable
"""
