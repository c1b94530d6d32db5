import pytest

from scpicli.client import is_query


@pytest.mark.parametrize(
    "command",
    [
        "DIAG:DEB:REG?",
        "DIAG:DEB:REG? 0x200",
        "DIAG:DEB:REG? 0x200\n",
        "*IDN?",
        "*IDN?\n",
        "SYST:ERR?\r\n",
    ],
)
def test_is_query(command):
    assert is_query(command)


@pytest.mark.parametrize(
    "command",
    [
        "",
        "*RST",
        "*SAV\n",
        'HELLO:WORLD "GOODBYE"',
        'HELLO:WORLD "GOODBYE"\n',
        "SOUR:VOLT 1.0 ?",
    ],
)
def test_is_not_query(command):
    assert not is_query(command)


def test_only_space_separates_header():
    """Tabs are part of the header, so the header does not end in '?'."""
    assert not is_query("MEAS:VOLT?\tCH1")
    assert is_query("MEAS:VOLT? CH1\tFAST")


def test_leading_space_gives_empty_header():
    # the first space-delimited token of " *IDN?" is the empty string
    assert not is_query(" *IDN? 1")
