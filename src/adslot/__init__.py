"""adslot: advertisement slots with a fail-closed markup sanitizer."""

__version__ = "0.1.0"
