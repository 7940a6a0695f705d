"""Tests for searchshaper utility modules."""
