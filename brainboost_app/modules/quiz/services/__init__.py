"""Stateful quiz services: the question store and its persistence adapters."""
