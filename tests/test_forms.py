from werkzeug.datastructures import MultiDict

from hotelhub import forms


def test_number_parses_and_normalises_integers():
    form = MultiDict({"price": " 120.50 ", "whole": "80.0", "bad": "abc"})
    assert forms.number(form, "price") == 120.5
    assert forms.number(form, "whole") == 80
    assert isinstance(forms.number(form, "whole"), int)
    assert forms.number(form, "bad", 7) == 7


def test_number_rejects_non_finite_values():
    form = MultiDict({"a": "nan", "b": "inf", "c": "-inf"})
    assert [forms.number(form, k, 0) for k in "abc"] == [0, 0, 0]


def test_integer_clamps():
    form = MultiDict({"rating": "9", "neg": "-3"})
    assert forms.integer(form, "rating", 5, lo=1, hi=5) == 5
    assert forms.integer(form, "neg", 5, lo=1, hi=5) == 1
    assert forms.integer(form, "missing", 5, lo=1, hi=5) == 5


def test_lines_and_removed_indexes():
    form = MultiDict([("amenities", "WiFi\n\n Minibar \n"), ("remove", "0"), ("remove", "2"), ("remove", "x")])
    assert forms.lines(form, "amenities") == ["WiFi", "Minibar"]
    assert forms.removed_indexes(form, "remove") == {0, 2}
