"""Locust entry point for the OpenCloudHub load-test suite.

Environment, test type and target come from TEST_ENV, TEST_TYPE and
TEST_TARGET (or a `.env` file):

    TEST_TYPE=load TEST_TARGET=model-wine locust -f load_tests/locustfile.py --headless

One user class per scenario and a load shape following the test type's
profile are exposed below; thresholds are evaluated when Locust quits.
"""

from locust import events

from ochub_loadtest.runtime.suite import LoadTestSuite

suite = LoadTestSuite.from_settings()
suite.register(events)

globals().update(suite.exports())
