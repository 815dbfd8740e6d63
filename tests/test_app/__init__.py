"""Tests for application wiring."""
