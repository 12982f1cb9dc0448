"""Issue export editing components.

Provides:
- Settings loaded from the environment and .env
- Structured logging
- The export record model and file access
- The command table applied to a loaded record
"""
