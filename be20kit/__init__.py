"""Building blocks for bulk data scanning: timers, locked containers, Unicode escaping, packet decoding, a thread pool and stop lists."""

__version__ = "2.1.0"