"""Award interpretation engine for the Aged Care Award 2010 (MA000018)."""

__version__ = "1.0.0"
