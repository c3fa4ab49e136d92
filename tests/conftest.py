"""Global pytest fixtures for STAGEHAND."""

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.mysql",
    "tests.fixtures.datagen",
]
