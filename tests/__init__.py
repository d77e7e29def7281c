"""Tests for podindex."""
