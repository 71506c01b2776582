"""Sender key loading and account access."""
