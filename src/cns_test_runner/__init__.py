"""Integration test runner for CNS."""
