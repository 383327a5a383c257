"""Tests for shtuff."""
