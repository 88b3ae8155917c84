"""Directive extraction and spec validation."""
