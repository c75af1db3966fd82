"""
Test suites package.

Kept importable so tests can share helpers (`testsuites.fakes`) and so
`run_tests.py` can address suites by path.
"""
