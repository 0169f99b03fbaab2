"""Festival schedule construction service."""

__version__ = "0.1.0"
