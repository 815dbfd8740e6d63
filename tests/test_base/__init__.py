"""Tests for base module."""
