"""
Test suites package.

Kept importable so conftests and tests can share `testsuites.fakes` and the
example page models under `testsuites.ui_testing.pages`.
"""
