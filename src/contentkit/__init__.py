"""contentkit — a polymorphic content core.

Content records of different categories share one collection; each
record's payload is validated by the schema registered for its category.
"""

__version__ = "0.1.0"
