# stringmailer/__init__.py
"""Single-endpoint email dispatch gate guarded by a shared secret."""

__version__ = "1.0.0"
