"""
Utility modules for StoreLens.

Cross-cutting concerns:
- Errors: Fatal error taxonomy
- Storage: Output tables for the rendering collaborator
"""
