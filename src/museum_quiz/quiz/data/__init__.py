"""Bundled question bank and configuration template."""
