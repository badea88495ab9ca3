"""Tests for __main__ module entry point."""

import subprocess
import sys

import pytest


@pytest.mark.integration
def test_main_module_help():
    """Test python -m focuspoint --help."""
    result = subprocess.run(
        [sys.executable, "-m", "focuspoint", "--help"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "crop" in result.stdout.lower()


@pytest.mark.integration
def test_main_module_commands():
    """Test that commands are available."""
    result = subprocess.run(
        [sys.executable, "-m", "focuspoint", "--help"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "crop-directory" in result.stdout.lower()
    assert "sniff" in result.stdout.lower()
