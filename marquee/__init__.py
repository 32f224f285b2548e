"""Weather, time and settings for a scrolling LED marquee clock, with a lenient JSON reader and writer."""

__version__ = "1.0.0"