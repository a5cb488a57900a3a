"""Tests for contract types: task records, enums and load errors."""
