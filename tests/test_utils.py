"""Unit tests for console helpers (dddscaffold.utils)."""

from __future__ import annotations

import pytest

from dddscaffold.utils import (
    print_error,
    print_step,
    print_success,
    print_summary_table,
    print_warning,
)


class TestRichOutputHelpers:
    @pytest.mark.unit
    def test_print_step(self, capsys: pytest.CaptureFixture[str]):
        print_step("Rendering skeleton")
        assert "-> Rendering skeleton" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_success(self, capsys: pytest.CaptureFixture[str]):
        print_success("All good")
        assert "All good" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_error(self, capsys: pytest.CaptureFixture[str]):
        print_error("Something broke")
        assert "Something broke" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_warning(self, capsys: pytest.CaptureFixture[str]):
        print_warning("Careful")
        assert "Careful" in capsys.readouterr().out

    @pytest.mark.unit
    def test_print_summary_table(self, capsys: pytest.CaptureFixture[str]):
        print_summary_table({"Project": "shop", "Contexts": "user"}, title="Project created")
        out = capsys.readouterr().out
        assert "Project created" in out
        assert "shop" in out
        assert "user" in out
