"""Tests for openapi."""
