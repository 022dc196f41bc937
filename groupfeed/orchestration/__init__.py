"""
Orchestration Layer - Workflow Coordination

This layer coordinates the load-group workflow.
- Outcome model shared by every step
- Ordered, short-circuiting step executor
- Composes extract, transform, and load operations into steps
"""
