"""Adapters from concrete parser trees to pathmark syntax nodes."""
