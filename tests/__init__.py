"""Tests for the Dyson BP01 integration."""
