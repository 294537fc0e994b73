"""factchecker: record store for companies, jobs, posts, topics and users."""

__version__ = "0.1.0"
