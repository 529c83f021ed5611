"""Main entry point for quizzator CLI."""

from quizzator.cli.app import app


def main():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    main()
