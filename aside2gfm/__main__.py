"""Allow ``python -m aside2gfm``."""

from aside2gfm.main import cli

if __name__ == "__main__":
    cli()
