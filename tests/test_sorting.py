import pytest

from atlaskit.query.sorting import SortCriteria, Sorting, SortOrder, parse_sorting


def test_sort_criteria_asc():
    c = SortCriteria("name", SortOrder.ASC)
    assert c.is_asc()
    assert not c.is_desc()
    assert str(c) == "name ASC"


def test_sort_criteria_desc():
    c = SortCriteria("age", SortOrder.DESC)
    assert c.is_desc()
    assert not c.is_asc()
    assert str(c) == "age DESC"


def test_parse_single():
    s = parse_sorting("name")
    assert len(s.criterias) == 1
    c = s.criterias[0]
    assert c.is_asc()
    assert c.tag == "name"


def test_parse_multiple():
    s = parse_sorting("name desc, age")
    assert len(s.criterias) == 2
    assert s.criterias[0].is_desc() and s.criterias[0].tag == "name"
    assert s.criterias[1].is_asc() and s.criterias[1].tag == "age"
    assert str(s) == "name DESC, age ASC"


def test_parse_round_trip():
    s = parse_sorting("name desc, age")
    assert parse_sorting(str(s)) == s


def test_invalid_order():
    with pytest.raises(ValueError) as exc:
        parse_sorting("name dask")
    assert str(exc.value) == 'invalid sort order - "dask" in "name dask"'


def test_invalid_criteria():
    with pytest.raises(ValueError, match="invalid sort criteria"):
        parse_sorting("name asc extra")


def test_empty_sorting_str():
    assert str(Sorting()) == ""