# Copyright (c) 2026 Monolink Systems
# Licensed under AGPLv3 (Nebula Open Source Edition, non-corporate)

import re
from importlib.metadata import PackageNotFoundError
from pathlib import Path
from unittest.mock import patch

import davinci_shared

PYPROJECT = Path(__file__).resolve().parents[3] / "pyproject.toml"


def _declared_version() -> str:
    match = re.search(r'^version\s*=\s*"([^"]+)"', PYPROJECT.read_text(encoding="utf-8"), re.MULTILINE)
    assert match, "pyproject.toml has no version"
    return match.group(1)


def test_version_matches_packaging():
    assert davinci_shared.version()
    assert davinci_shared.version() == _declared_version()


def test_fallback_constant_matches_packaging():
    assert davinci_shared.__version__ == _declared_version()


def test_version_without_installed_metadata():
    with patch("davinci_shared._dist_version", side_effect=PackageNotFoundError("davinci-shared")):
        assert davinci_shared.version() == davinci_shared.__version__


def test_public_surface():
    assert callable(davinci_shared.cpu_count)
    assert callable(davinci_shared.unix_timestamp)
    assert callable(davinci_shared.get_system_info)
