"""Building blocks for OpenSSH keys, fingerprints, certificates and key files."""

__version__ = "0.1.0"