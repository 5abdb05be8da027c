import math

import pytest

from imgpick.srcset.errors import (
    DuplicateDescriptorError,
    FallbackConflictError,
    InvalidDensityError,
    InvalidWidthError,
    MalformedCountError,
    NotANumberError,
    SrcsetError,
    UnsupportedDescriptorError,
)
from imgpick.srcset.models import Candidate, Descriptor, DescriptorKind
from imgpick.srcset.parser import parse, parse_number, tokenize


@pytest.mark.parametrize("strict", [False, True])
def test_single_url_without_descriptor(strict):
    assert parse("a.jpg", strict=strict) == [Candidate(url="a.jpg")]
    cand = parse("  https://cdn.example.com/a.jpg  ", strict=strict)[0]
    assert cand.url == "https://cdn.example.com/a.jpg"
    assert cand.width is None and cand.height is None and cand.density is None


def test_density_candidates_keep_order():
    out = parse("a.jpg 1x, b.jpg 2x", strict=True)
    assert out == [
        Candidate("a.jpg", Descriptor(DescriptorKind.DENSITY, 1.0)),
        Candidate("b.jpg", Descriptor(DescriptorKind.DENSITY, 2.0)),
    ]
    assert [c.density for c in out] == [1, 2]


def test_width_is_stored_as_int():
    cand = parse("a.jpg 100w", strict=True)[0]
    assert cand.width == 100
    assert isinstance(cand.width, int)
    assert cand.to_dict() == {"url": "a.jpg", "width": 100}


def test_tokenize_skips_blank_segments():
    raw = tokenize("a.jpg 1x, , b.jpg 2x,")
    assert [r.url for r in raw] == ["a.jpg", "b.jpg"]
    assert raw[0].descriptors == ("1x",)
    assert tokenize("") == []
    assert tokenize(" , ,, ") == []


def test_tokenize_without_space_after_comma():
    raw = tokenize("a.jpg 1x,b.jpg 2x")
    assert [(r.url, r.descriptors) for r in raw] == [("a.jpg", ("1x",)), ("b.jpg", ("2x",))]


def test_fallback_conflicts_with_explicit_1x():
    with pytest.raises(FallbackConflictError):
        parse("a.jpg, a.jpg 1x", strict=True)
    with pytest.raises(FallbackConflictError):
        parse("b.jpg 1x, a.jpg", strict=True)


def test_only_one_fallback():
    with pytest.raises(FallbackConflictError, match="Only one fallback"):
        parse("a.jpg, b.jpg", strict=True)


def test_fallback_with_other_densities_is_fine():
    out = parse("a.jpg, b.jpg 2x", strict=True)
    assert out[0].descriptor is None
    assert out[1].density == 2


def test_more_than_one_descriptor():
    with pytest.raises(MalformedCountError, match="found 2: 100w 2x"):
        parse("a.jpg 100w 2x", strict=True)


def test_width_must_be_positive_integer():
    with pytest.raises(InvalidWidthError, match="greater than zero"):
        parse("a.jpg 0w", strict=True)
    with pytest.raises(InvalidWidthError, match="integer"):
        parse("a.jpg 50.5w", strict=True)


def test_density_must_be_positive():
    with pytest.raises(InvalidDensityError):
        parse("a.jpg 0x", strict=True)
    with pytest.raises(InvalidDensityError):
        parse("a.jpg -1.5x", strict=True)


def test_unsupported_descriptors():
    with pytest.raises(UnsupportedDescriptorError, match="Height"):
        parse("a.jpg 100h", strict=True)
    with pytest.raises(UnsupportedDescriptorError, match="Invalid srcset descriptor: 2q"):
        parse("a.jpg 2q", strict=True)


def test_not_a_number_checked_first():
    with pytest.raises(NotANumberError, match="abch is not a valid number"):
        parse("a.jpg abch", strict=True)
    with pytest.raises(NotANumberError):
        parse("a.jpg w", strict=True)


def test_duplicate_descriptor():
    with pytest.raises(DuplicateDescriptorError, match="1x"):
        parse("a.jpg 1x, a.jpg 1x", strict=True)
    with pytest.raises(DuplicateDescriptorError, match="300w"):
        parse("a.jpg 300w, b.jpg 200w, c.jpg 300w", strict=True)


def test_same_value_different_kind_is_not_duplicate():
    out = parse("a.jpg 2w, b.jpg 2x", strict=True)
    assert [c.url for c in out] == ["a.jpg", "b.jpg"]


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse("a.jpg 1x 2x", strict=True)
    assert issubclass(DuplicateDescriptorError, SrcsetError)


def test_ledger_is_per_call():
    assert len(parse("a.jpg 1x", strict=True)) == 1
    assert len(parse("a.jpg 1x", strict=True)) == 1


def test_loose_mode_is_best_effort():
    assert parse("a.jpg 100h")[0].height == 100
    assert parse("a.jpg 100w 2x")[0].width == 100
    assert parse("a.jpg 2x 100w")[0].width == 100
    assert parse("a.jpg 2q")[0].descriptor is None
    assert math.isnan(parse("a.jpg abcx")[0].density)
    assert parse("a.jpg 50.5w")[0].width == 50.5
    assert [c.url for c in parse("a.jpg, b.jpg, a.jpg 1x, a.jpg 1x")] == ["a.jpg", "b.jpg", "a.jpg", "a.jpg"]


@pytest.mark.parametrize(
    "text",
    ["", ",", " , ,", "a", "\n\t", ",,a,,", "a.jpg -x", "a.jpg 1e400w", "a.jpg Infinityx", "a b c d, e f", "x h w"],
)
def test_loose_mode_never_raises(text):
    parse(text)


def test_parse_number_reads_leading_prefix():
    assert parse_number("1.5") == 1.5
    assert parse_number("2abc") == 2
    assert parse_number(".5") == 0.5
    assert parse_number("1e3") == 1000
    assert parse_number("Infinity") == math.inf
    assert math.isnan(parse_number(""))
    assert math.isnan(parse_number("abc"))


def test_loose_mode_keeps_width_over_other_kinds():
    assert parse("a.jpg 2x 100w")[0] == Candidate("a.jpg", Descriptor(DescriptorKind.WIDTH, 100))
    assert parse("a.jpg 2x 100h")[0].height == 100
    assert parse("a.jpg 100w 300w")[0].width == 300
