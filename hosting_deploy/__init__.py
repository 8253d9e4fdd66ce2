"""Deploy Firebase Hosting previews and production sites from CI."""

__version__ = "0.1.0"
