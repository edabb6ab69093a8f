# Locust scripts for the OpenCloudHub load-test suite
"""
Run with `locust -f load_tests/locustfile.py`.

The locustfile builds its user classes and load shape from
`ochub_loadtest`; selection happens through TEST_ENV, TEST_TYPE and
TEST_TARGET.
"""
