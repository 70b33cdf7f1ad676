"""CI step that runs bundle-inspector and publishes its reports and size metrics."""

__all__ = ["__version__"]

__version__ = "1.0.0"
