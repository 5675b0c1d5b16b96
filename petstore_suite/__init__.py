"""
Petstore test suites package.

`petstore_suite` stays importable to support:
  - IDE navigation
  - the programmatic runner (`run_tests.py`)
  - unit tests of the framework
"""
