"""Entry point for 'python -m docbase'."""

from docbase.cli import main

if __name__ == "__main__":
    main()
