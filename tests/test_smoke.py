"""Minimal smoke tests for project scaffolding."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration


def test_plotting_engine_imports() -> None:
    """Import the plotting engine and verify the public entry point exists."""

    from plotting import render_chart

    assert callable(render_chart)


def test_plotting_engine_does_not_import_django() -> None:
    """The engine package stays free of Django imports."""

    from pathlib import Path

    import plotting

    package_dir = Path(plotting.__file__).parent
    for source in package_dir.glob("*.py"):
        text = source.read_text(encoding="utf-8")
        assert "import django" not in text, source.name
        assert "from django" not in text, source.name


def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import os

    import django
    from django.conf import settings

    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "chartComposer.settings")
    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert settings.CHART_DEFAULT_WIDTH > 0
