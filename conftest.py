"""Root pytest configuration: loads pytest-asyncio for every test directory."""

pytest_plugins = ("pytest_asyncio",)
