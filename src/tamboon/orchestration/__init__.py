"""
Orchestration Layer - Workflow Coordination

This layer coordinates the donation run.
- Pure workflow coordination
- No business logic
- Composes extract, transform, and load operations
"""
