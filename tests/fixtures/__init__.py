"""Shared response documents for tests."""
