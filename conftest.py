"""
Pytest configuration for scoreboard tests
"""


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "asyncio: mark test as an asyncio test."
    )
