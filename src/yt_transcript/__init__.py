"""
YouTube transcript retrieval: video ID parsing, innertube transcript
fetching with a yt-dlp subtitle fallback, and segment normalization.
"""

__version__ = "0.1.0"
