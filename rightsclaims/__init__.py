"""rightsclaims: signed, content-addressed Create and License claims."""

__version__ = "0.1.0"
