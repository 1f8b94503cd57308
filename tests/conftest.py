"""Global pytest fixtures for janusspec."""

pytest_plugins = [
    "tests.fixtures.engine",
]
