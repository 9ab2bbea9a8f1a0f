"""
Integration Tests

End-to-end tests that drive the txkv entry point over stdin/stdout.

Run with: python -m pytest tests/test_integration.py -v
"""

import io

import pytest
from txkv import repl


def run_lines(monkeypatch, capsys, *lines: str, argv=None) -> list:
    """Feed lines to the entry point and return the printed output lines."""
    monkeypatch.setattr("sys.stdin", io.StringIO("".join(f"{line}\n" for line in lines)))
    assert repl.main(argv or []) == 0
    return capsys.readouterr().out.splitlines()


@pytest.mark.integration
class TestScenarios:
    """The canonical command scenarios."""

    def test_set_then_get(self, monkeypatch, capsys):
        """SET a 5, GET a => 5"""
        assert run_lines(monkeypatch, capsys, "SET a 5", "GET a") == ["5"]

    def test_get_missing(self, monkeypatch, capsys):
        """GET missing => <nil>"""
        assert run_lines(monkeypatch, capsys, "GET missing") == ["<nil>"]

    def test_incr_twice(self, monkeypatch, capsys):
        """INCR c twice, GET c => 2"""
        assert run_lines(monkeypatch, capsys, "INCR c", "INCR c", "GET c") == ["1", "2", "2"]

    def test_multi_exec(self, monkeypatch, capsys):
        """Queued SETs apply in order on EXEC."""
        output = run_lines(monkeypatch, capsys, "MULTI", "SET a 1", "SET a 2", "EXEC", "GET a")
        assert output == ["OK", "QUEUED", "QUEUED", "2", "2"]

    def test_multi_discard(self, monkeypatch, capsys):
        """Discarded SET never reaches the store."""
        output = run_lines(monkeypatch, capsys, "MULTI", "SET a 99", "DISCARD", "GET a")
        assert output == ["OK", "QUEUED", "1", "<nil>"]

    def test_exec_without_multi(self, monkeypatch, capsys):
        """EXEC with no MULTI => NOT IN TRANSACTION"""
        assert run_lines(monkeypatch, capsys, "EXEC") == ["NOT IN TRANSACTION"]


@pytest.mark.integration
class TestEndToEnd:
    """Longer workflows through the entry point."""

    def test_complete_workflow(self, monkeypatch, capsys):
        """Test a mixed session of immediate and transactional commands."""
        output = run_lines(
            monkeypatch, capsys,
            "SET x 10",
            "SET y 10",
            "SET z 3",
            "DELVALUE 10",
            "GET x",
            "MULTI",
            "INCR z",
            "MULTI",
            "DEL z",
            "EXEC",
            "GET z",
            "DISCARD",
            "BOGUS 1",
            "GET y",
        )

        assert output == [
            "2",
            "<nil>",
            "OK",
            "QUEUED",
            "ALREADY IN TRANSACTION",
            "QUEUED",
            "2",
            "<nil>",
            "NOT IN TRANSACTION",
            "ERROR unknown command 'BOGUS'",
            "<nil>",
        ]

    def test_verbose_exec_flag(self, monkeypatch, capsys):
        """Test --verbose-exec prints each batch reply."""
        output = run_lines(
            monkeypatch, capsys,
            "MULTI", "INCR a", "GET a", "SET b 1", "EXEC",
            argv=["--verbose-exec"],
        )
        assert output == ["OK", "QUEUED", "QUEUED", "QUEUED", "3", "1) 1", "2) 1", "3) OK"]

    def test_int_bits_flag(self, monkeypatch, capsys):
        """Test --int-bits sets the wraparound width and operand range."""
        output = run_lines(
            monkeypatch, capsys,
            "SET a 2147483647", "INCR a", "SET b 2147483648",
            argv=["--int-bits", "32"],
        )
        assert output == ["-2147483648", "ERROR integer out of range '2147483648'"]

    def test_64_bit_wraparound(self, monkeypatch, capsys):
        """Test the default width wraps at 2**63."""
        output = run_lines(monkeypatch, capsys, "SET a 9223372036854775807", "INCR a")
        assert output == ["-9223372036854775808"]

    def test_empty_input(self, monkeypatch, capsys):
        """Test end of input with nothing read is a clean exit."""
        assert run_lines(monkeypatch, capsys) == []

    def test_invalid_int_bits(self, capsys):
        """Test a non-positive width is rejected by argument parsing."""
        with pytest.raises(SystemExit):
            repl.parse_args(["--int-bits", "0"])
