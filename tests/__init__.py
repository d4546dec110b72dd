"""Tests for Book Search Hub."""
