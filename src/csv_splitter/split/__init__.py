"""Streaming partition engine and split policies."""
