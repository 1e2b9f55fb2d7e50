"""Encoding and decoding of DHCPv6 options, with helpers for interface addresses."""

__version__ = "0.1.0"