"""Terminal administration panel for a site's news announcements."""

__version__ = "0.1.0"
