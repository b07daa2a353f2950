"""Terminal procedure chart directory for FAA d-TPP cycles."""

__version__ = "0.1.0"
