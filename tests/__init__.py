"""
Test Suite for Frollo → PocketSmith Sync

Test Structure:
- fixtures/: Synthetic Frollo payloads and in-memory service fakes
- unit/: Unit tests mirroring src/ package structure
- integration/: CLI and end-to-end sync workflow tests

Test Categories:
- Core utilities (currency, money, dates, config)
- Frollo and PocketSmith clients and models
- Sync windows, resolution, import, balance and engine
- CLI commands

Test Data:
All test data uses synthetic accounts and transactions.
Real financial data is never included in tests.
"""
