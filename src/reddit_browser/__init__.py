"""Terminal dashboard for browsing a subreddit's top posts."""

__version__ = "0.1.0"
