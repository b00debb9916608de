"""Test suite for Release Tag Resolver.

This package contains test modules and fixtures for verifying the functionality
of the Release Tag Resolver tool. It includes tests for:
- Tag format compilation and tag classification
- Per-branch tag resolution and cross-branch accumulation
- Git access through the I/O layer
- Configuration handling and the CLI

The test suite uses pytest and provides fixtures for common test scenarios.
"""
