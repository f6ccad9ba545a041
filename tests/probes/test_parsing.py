import pytest

from hostfetch.probes.parsing import last_version_token, leading_int, parse_key_value_lines, version_token


def test_key_value_lines_first_occurrence_wins():
    content = 'A="one"\n# B=comment\n\nB = two\nA=three\nno separator\n'
    assert parse_key_value_lines(content) == {"A": "one", "B": "two"}
    assert parse_key_value_lines("A=1\nA=2", first_wins=False) == {"A": "2"}


def test_colon_separated_values_keep_inner_colons():
    assert parse_key_value_lines("Time\t: 10:30:00\n", ":") == {"Time": "10:30:00"}


@pytest.mark.parametrize(
    ("text", "expected"),
    [("100000.", 100000), ("  42 kB", 42), ("", None), ("kB 42", None)],
)
def test_leading_int(text, expected):
    assert leading_int(text) == expected


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("5.2.21(1)-release", "5.2.21"),
        ("3.7.0,", "3.7.0"),
        ("10.0.19045.3803]", "10.0.19045.3803"),
        ("(x86_64-pc-linux-gnu)", None),
        ("2023-04-14", None),
        ("version", None),
        ("v1.2", None),
    ],
)
def test_version_token(token, expected):
    assert version_token(token) == expected


def test_last_version_token_scans_from_the_end():
    line = "tcsh 6.24.10 (Astron) 2023-04-14 (x86_64-unknown-linux) options wide,nls"
    assert last_version_token(line.split()) == "6.24.10"
    assert last_version_token([]) is None
