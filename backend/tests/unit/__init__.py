"""
Unit tests package.

Contains isolated unit tests for the layout engine, services, repositories
and controllers. The booking backend is replaced by mocks.
"""
