"""Tabular data model consumed by chart builders."""
