"""
Test suites package.

Kept importable so page objects, fixtures and data loaders can be shared:
  - `testsuites.ui_testing`: framework, page objects, address data, browser tests
  - `testsuites.unit`: browser-free tests against in-memory page doubles
"""
