"""Argument validation against declared shapes."""
