"""
Extract Layer - Pure I/O to External Sources

This layer handles all external data fetching with no business logic.
- Group page HTML download
- Facebook Graph API client (group record + feed)
- No imports from transform or load layers
"""
