"""Signature providers for the two supported curves."""
