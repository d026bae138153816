import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--run-long-tests",
        action="store_true",
        default=False,
        help="run long-running swarm tests",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "long_run: marks tests that simulate large swarms for many ticks",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-long-tests"):
        return

    skip_marker = pytest.mark.skip(
        reason="Long-running swarm test (use --run-long-tests)",
    )

    for item in items:
        if "long_run" in item.keywords:
            item.add_marker(skip_marker)