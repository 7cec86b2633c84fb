"""Encoders for composed log documents."""
