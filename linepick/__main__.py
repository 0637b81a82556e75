"""Allow ``python -m linepick``."""

from linepick.cli import app

if __name__ == "__main__":
    app()
