from docwf.interface.cli.cli import cli

__all__ = ["cli"]
