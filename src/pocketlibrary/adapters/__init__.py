"""Adapters binding the library core to concrete infrastructure."""
