from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Callable

import pytest

try:
    from hypothesis import HealthCheck, settings
except ImportError:  # pragma: no cover - hypothesis is optional in some environments
    HealthCheck = None  # type: ignore[assignment]
    settings = None  # type: ignore[assignment]

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def make_payload(
    *,
    total_rows: int = 30,
    last_page: int = 3,
    current_page: int = 1,
    limit: int = 10,
    rows: list[dict[str, Any]] | None = None,
    data_key: str = "items",
) -> dict[str, Any]:
    """Build a response body in the ``{paging, metadata, <data_key>}`` shape."""

    if rows is None:
        rows = [{"id": 1, "name": "Mallard"}, {"id": 2, "name": "Teal"}]
    return {
        "paging": {
            "total_rows": total_rows,
            "last_page": last_page,
            "current_page": current_page,
            "limit": limit,
        },
        "metadata": {"id": "ID", "name": "Name"},
        data_key: rows,
    }


@pytest.fixture
def payload_factory() -> Callable[..., dict[str, Any]]:
    return make_payload


_HYPOTHESIS_PROFILES_REGISTERED = False


def _configure_hypothesis_profiles() -> str:
    """Register Hypothesis profiles and return the default profile name."""

    global _HYPOTHESIS_PROFILES_REGISTERED
    if settings is None:
        return "dev"

    if not _HYPOTHESIS_PROFILES_REGISTERED:
        suppress_checks = (HealthCheck.filter_too_much,) if HealthCheck else ()
        settings.register_profile(
            "dev",
            settings(max_examples=50, deadline=500, suppress_health_check=suppress_checks),
        )
        settings.register_profile(
            "ci",
            settings(max_examples=200, deadline=750, print_blob=True, suppress_health_check=suppress_checks),
        )
        settings.register_profile(
            "stress",
            settings(max_examples=1000, deadline=None, print_blob=True, suppress_health_check=suppress_checks),
        )
        _HYPOTHESIS_PROFILES_REGISTERED = True
    return "dev"


# The hypothesis plugin owns ``--hypothesis-profile`` and loads the named
# profile in its own ``pytest_configure``, so the profiles must exist first.
DEFAULT_HYPOTHESIS_PROFILE = _configure_hypothesis_profiles()


def pytest_configure(config: pytest.Config) -> None:
    """Declare pytest markers and configure Hypothesis defaults."""

    for marker, description in [
        ("duckdb", "Tests that run DuckDB queries."),
        ("integration", "Tests that span the server, transport and controller."),
    ]:
        config.addinivalue_line("markers", f"{marker}: {description}")

    if settings is None:
        return

    selected = config.getoption("hypothesis_profile", default=None)
    if selected:
        settings.load_profile(selected)
    elif os.getenv("CI"):
        settings.load_profile("ci")
    else:
        settings.load_profile(DEFAULT_HYPOTHESIS_PROFILE)
