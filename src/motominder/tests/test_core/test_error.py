from collections import Counter

from motominder.core.error import Error


class TestErrorAggregate:

    def test_add_skips_none(self):
        error = Error()
        error.add("first")
        error.add(None)
        error.add("second")

        assert error.messages == ["first", "second"]

    def test_add_range_ignores_none_iterable_and_none_entries(self):
        error = Error("a")
        error.add_range(None)
        error.add_range(["b", None, "c"])

        assert error.messages == ["a", "b", "c"]

    def test_messages_is_a_copy(self):
        error = Error("a")
        error.messages.append("b")

        assert len(error) == 1

    def test_empty_error_is_falsy(self):
        assert not Error()
        assert Error("x")


class TestErrorMerge:

    def test_merge_keeps_left_then_right_order(self):
        merged = Error(messages=["l1", "l2"]) + Error(messages=["r1"])

        assert merged.messages == ["l1", "l2", "r1"]

    def test_merge_is_null_safe_on_either_side(self):
        right = Error("r")

        assert (None + right).messages == ["r"]
        assert (right + None).messages == ["r"]
        assert Error.merge(None, right).messages == ["r"]

    def test_merge_of_two_none_is_empty_but_present(self):
        merged = Error.merge(None, None)

        assert merged is not None
        assert len(merged) == 0

    def test_merge_is_commutative_on_content(self):
        left = Error(messages=["year out of range", "vin too short"])
        right = Error(messages=["make is empty", "vin too short"])

        assert Counter((left + right).messages) == Counter((right + left).messages)
        assert (left + right).messages != (right + left).messages

    def test_merge_does_not_mutate_operands(self):
        left, right = Error("l"), Error("r")
        _ = left + right

        assert left.messages == ["l"]
        assert right.messages == ["r"]

    def test_in_place_add_accumulates(self):
        error = Error()
        error += Error("one")
        error += None
        error += Error("two")

        assert error.messages == ["one", "two"]


class TestErrorOrNone:

    def test_empty_aggregate_becomes_none(self):
        assert Error.or_none(Error()) is None
        assert Error.or_none(None) is None

    def test_non_empty_aggregate_is_returned_as_is(self):
        error = Error("kept")

        assert Error.or_none(error) is error


def test_str_joins_messages():
    assert str(Error(messages=["a", "b"])) == "a; b"


def test_equality_compares_messages():
    assert Error(messages=["a", "b"]) == Error(messages=["a", "b"])
    assert Error("a") != Error("b")
