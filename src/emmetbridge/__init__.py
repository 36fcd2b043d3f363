"""emmetbridge - abbreviation expansion glue for text editor hosts."""

__version__ = "0.1.0"
