"""Adapters binding the counter domain to concrete persistence layers."""
