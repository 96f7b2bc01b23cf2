"""Tests for target classification and structural introspection."""

import collections

import pytest

from evaluate.targets import (
    EvaluationTarget,
    TargetKind,
    count_elements,
    count_methods,
    count_properties,
    is_collection,
    is_object_like,
    wrap_targets,
)

from tests.fixtures import Order, Point, Ranged, SelfDescribing, Slotted, build_squares


class Invocable:
    def __call__(self):
        return None


class TestClassify:
    def test_function_is_work(self):
        target = EvaluationTarget.classify(build_squares)
        assert target.kind == TargetKind.WORK
        assert target.is_work

    def test_lambda_is_work(self):
        assert EvaluationTarget.classify(lambda: None).is_work

    def test_callable_instance_is_work(self):
        assert EvaluationTarget.classify(Invocable()).is_work

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, "text", 42, 1.5, True, None, Ranged()])
    def test_everything_else_is_value(self, value):
        assert EvaluationTarget.classify(value).kind == TargetKind.VALUE

    def test_work_name_uses_qualname(self):
        assert EvaluationTarget.classify(build_squares).name == "build_squares"

    def test_value_name_uses_type_and_index(self):
        assert EvaluationTarget.classify([1], index=2).name == "list#2"


class TestWrapTargets:
    def test_none_is_empty(self):
        assert wrap_targets(None) == []

    def test_empty_list_is_empty(self):
        assert wrap_targets([]) == []

    def test_list_is_target_list(self):
        targets = wrap_targets([build_squares, [1, 2, 3]])
        assert [t.kind for t in targets] == [TargetKind.WORK, TargetKind.VALUE]
        assert [t.index for t in targets] == [0, 1]

    def test_single_subject_is_wrapped(self):
        targets = wrap_targets("hello")
        assert len(targets) == 1
        assert targets[0].subject == "hello"

    def test_tuple_is_a_single_value(self):
        targets = wrap_targets((1, 2, 3))
        assert len(targets) == 1
        assert targets[0].subject == (1, 2, 3)


class TestCounts:
    @pytest.mark.parametrize(
        "value, expected",
        [([1, 2, 3], 3), ((1, 2), 2), ({"a": 1, "b": 2}, 2), ({1, 2, 3, 4}, 4), (range(5), 5)],
    )
    def test_count_elements(self, value, expected):
        assert count_elements(value) == expected

    @pytest.mark.parametrize("value", ["abc", b"abc", 42, 1.5, True, None, Ranged()])
    def test_count_elements_not_applicable(self, value):
        assert count_elements(value) is None

    def test_plain_object(self):
        obj = Ranged()
        assert count_properties(obj) == 1
        assert count_methods(obj) == 1

    def test_dataclass(self):
        order = Order(id=1, customer="acme", lines=[3, 4])
        assert count_properties(order) == 3
        assert count_methods(order) == 2

    def test_slots(self):
        point = Slotted(3, 4)
        assert is_object_like(point)
        assert count_properties(point) == 2
        assert count_methods(point) == 1

    def test_introspectable_reports_itself(self):
        obj = SelfDescribing()
        assert count_properties(obj) == 7
        assert count_methods(obj) == 3

    def test_namedtuple_is_a_collection(self):
        point = Point(1, 2)
        assert is_collection(point)
        assert not is_object_like(point)
        assert count_elements(point) == 2
        assert count_properties(point) is None

    @pytest.mark.parametrize("value", ["abc", 42, 1.5, True, None, [1], {"a": 1}])
    def test_members_not_applicable(self, value):
        assert count_properties(value) is None
        assert count_methods(value) is None

    @pytest.mark.parametrize(
        "value",
        [
            collections.OrderedDict(a=1, b=2),
            collections.Counter("aab"),
            collections.UserList([1, 2]),
            collections.UserDict(a=1, b=2),
            collections.deque([1, 2]),
        ],
    )
    def test_container_types_are_measured_by_elements(self, value):
        assert not is_object_like(value)
        assert count_elements(value) == 2
        assert count_properties(value) is None
        assert count_methods(value) is None
