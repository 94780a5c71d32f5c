"""inkwell.

Backend services for a Medium-style blog: posts with stable slugs,
user profiles with usernames, threaded comments, claps and bookmarks.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
