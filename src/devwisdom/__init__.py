"""devwisdom: wisdom quotes and advisors over a JSON-RPC stdio server."""

__version__ = "0.1.0"
