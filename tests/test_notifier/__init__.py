"""Tests for notifier."""
