"""Entry point for running Scale Advisor as a module.

Usage:
    python -m scale_advisor [command] [options]

Example:
    python -m scale_advisor tools
    python -m scale_advisor analyze https://github.com/owner/repo
"""

from scale_advisor.cli import app

if __name__ == "__main__":
    app()
