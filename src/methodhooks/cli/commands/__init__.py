"""
CLI commands for methodhooks
"""

from methodhooks.cli.commands.hooks import app as hooks_app

__all__ = [
    "hooks",
]

# Expose apps for main.py
hooks = type("hooks", (), {"app": hooks_app})()
