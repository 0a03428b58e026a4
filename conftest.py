import pytest

def pytest_addoption(parser):
    parser.addoption("--quick", action="store_true",
                     default=False, help="skip the slow randomized tests")
    parser.addoption("--slow", action="store_true",
                     default=False, help="run only the slow randomized tests")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--slow"):
        return
    # Tests opt in to being slow by requesting the `slow` fixture
    skip_quick = pytest.mark.skip(reason="--slow given: skipping tests that are not slow")
    for item in items:
        if 'slow' not in item.fixturenames:
            item.add_marker(skip_quick)
