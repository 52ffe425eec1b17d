"""Qt integration for live PII preview. Requires PySide6."""
