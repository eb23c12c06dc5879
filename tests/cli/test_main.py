import sys

import pytest

from cli.__main__ import main


def test_unknown_global_option_rejected(monkeypatch):
    """Test that options the CLI does not define are rejected."""
    monkeypatch.setattr(sys, "argv", ["cli", "--quiet", "reports", "dashboard"])

    with pytest.raises(SystemExit) as exc_info:
        main()

    assert exc_info.value.code == 2
