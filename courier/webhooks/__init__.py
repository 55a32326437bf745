"""Webhook verification, decoding and dispatch."""
