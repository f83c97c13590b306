"""docwf: multi-role technical document drafting and revision workflow."""

__version__ = "0.1.0"
