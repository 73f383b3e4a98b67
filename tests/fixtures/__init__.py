"""
Test Fixtures and Utilities

Shared test data and fakes for the sync test suite.

This module provides:
- Synthetic Frollo account and transaction payloads
- In-memory stand-ins for the Frollo and PocketSmith clients that record
  every call, so tests can assert on API traffic

All test data is synthetic and does not contain real financial information.
"""
