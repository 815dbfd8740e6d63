"""Tests for importer."""
