import pytest

from airss.scoring import extract_score, parse_score


@pytest.mark.parametrize(
    "response, expected",
    [
        ("Score: 85\n- Uses a Z80", "85"),
        ("RATING:42", "42"),
        ("Overall score:   7", "7"),
        ("The 8080 build is neat. Score: 90", "90"),
        ("I would give this 65 out of 100", "65"),
        ("Nothing numeric here", "N/A"),
        ("", "N/A"),
    ],
)
def test_extract_score(response, expected):
    assert extract_score(response) == expected


def test_extract_score_fallback_takes_first_number():
    # Known limitation: an unlabelled response yields whatever number comes first.
    assert extract_score("Built around a 6502, I'd say 80") == "6502"


def test_extract_score_ignores_non_ascii_digits():
    assert extract_score("Score: \u0668\u0667") == "N/A"
    assert extract_score("Score: \u0668\u0667, maybe 40") == "40"


@pytest.mark.parametrize(
    "value, expected",
    [("85", 85), ("0", 0), ("", 0), ("N/A", 0), ("12abc", 0), (None, 0)],
)
def test_parse_score(value, expected):
    assert parse_score(value) == expected
