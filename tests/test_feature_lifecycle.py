import unittest
from typing import NoReturn, get_type_hints

from regforge.errors import RegisterMapError, SourceError
from regforge.input_base.component import Component
from regforge.input_base.feature import VERIFY_ALL, VERIFY_COMPONENT, Feature, build_action, validator
from regforge.input_base.input_value import NA_VALUE, InputValue, Position
from regforge.input_base.property import Property


class Name(Feature):
    name = Property()

    @build_action
    def _parse(self, value, match=None):
        self._name = value


class Counted(Feature):
    calls = 0
    whole_tree_calls = 0
    value = Property(default="fallback")

    @build_action
    def _parse(self, value):
        self._value = value

    @validator
    def _check(self):
        type(self).calls += 1

    @validator(scope=VERIFY_ALL)
    def _check_tree(self):
        type(self).whole_tree_calls += 1


class Passive(Feature):
    label = Property(body=lambda self: f"passive:{self.feature_name}")


def _component(position=None) -> Component:
    c = Component(None, "block")
    c.position = position
    return c


class TestProperties(unittest.TestCase):
    def test_stored_field_default_body_and_forwarding(self) -> None:
        class Sized(Feature):
            width = Property(default=1)
            msb = Property(forward_to="_msb", method=True)
            kind = Property(forward_to="kind_name", on_class=True)

            @build_action
            def _parse(self, value):
                self._width = value

            def _msb(self, lsb):
                return lsb + self.width - 1

            @classmethod
            def kind_name(cls):
                return cls.__name__

        f = Sized(_component(), "width")
        self.assertEqual(1, f.width)
        f.build(InputValue(8))
        self.assertEqual(8, f.width)
        self.assertEqual(11, f.msb(4))
        self.assertEqual("Sized", f.kind)
        self.assertEqual(["width", "msb", "kind"], Sized.properties())

        self.assertEqual("passive:label", Passive(_component(), "label").label)

    def test_need_validation_validates_before_resolving(self) -> None:
        seen = []

        class Checked(Feature):
            @Property(need_validation=True)
            def summary(self):
                return list(seen)

            @build_action
            def _parse(self, value):
                pass

            @validator
            def _check(self):
                seen.append("validated")

        f = Checked(_component(), "summary")
        f.build(InputValue(1))
        self.assertEqual(["validated"], f.summary)
        self.assertEqual(["validated"], f.summary)

    def test_runtime_declarations(self) -> None:
        Dynamic = type("Dynamic", (Feature,), {})
        Dynamic.define_property("size")
        Dynamic.add_build_action(lambda self, value: setattr(self, "_size", value * 2))
        f = Dynamic(_component(), "size")
        f.build(InputValue(3))
        self.assertEqual(6, f.size)


class TestBuild(unittest.TestCase):
    def test_build_records_position_and_runs_once(self) -> None:
        pos = Position("a.yaml", 2, 3)
        f = Name(_component(), "name")
        f.build(InputValue("reg0", pos))
        f.build(InputValue("reg1", pos))
        self.assertEqual("reg0", f.name)
        self.assertEqual(pos, f.position)
        self.assertTrue(f.built)

    def test_not_available_input_skips_actions(self) -> None:
        f = Counted(_component(Position("map.yaml")), "value")
        f.build(NA_VALUE)
        self.assertEqual("fallback", f.value)
        self.assertEqual(Position("map.yaml"), f.position)

    def test_extra_arguments_are_passed_before_the_value(self) -> None:
        received = []

        class WithConfig(Feature):
            @build_action
            def _parse(self, configuration, value):
                received.append((configuration, value))

        WithConfig(_component(), "x").build("cfg", InputValue(5))
        self.assertEqual([("cfg", 5)], received)

    def test_passive_feature_build_is_a_no_op(self) -> None:
        f = Passive(_component(), "label")
        f.build(InputValue("ignored"))
        f.validate()
        self.assertTrue(Passive.passive_feature())
        self.assertFalse(f.built)

    def test_automatic_match_result_is_passed_explicitly(self) -> None:
        results = []

        class Range(Feature):
            @build_action
            def _parse(self, value, match=None):
                results.append(None if match is None else (match.index, match.captures))

        Range.input_pattern([r"(\d+):(\d+)", r"(\d+)"])
        Range(_component(), "range").build(InputValue("7:4"))
        Range(_component(), "range").build(InputValue("7"))
        Range(_component(), "range").build(InputValue("x"))
        self.assertEqual([(0, ("7", "4")), (1, ("7",)), None], results)

    def test_manual_matching(self) -> None:
        results = []

        class Manual(Feature):
            @build_action
            def _parse(self, value):
                results.append(self.pattern_match(value).captures)

        Manual.input_pattern(r"(\w+)", match_automatically=False)
        Manual(_component(), "manual").build(InputValue("abc"))
        self.assertEqual([("abc",)], results)


class TestValidate(unittest.TestCase):
    def setUp(self) -> None:
        Counted.calls = 0
        Counted.whole_tree_calls = 0

    def test_validate_is_idempotent(self) -> None:
        f = Counted(_component(), "value")
        f.build(InputValue(1))
        for _ in range(3):
            f.validate()
        self.assertEqual(1, Counted.calls)
        self.assertTrue(f.validated)

    def test_whole_tree_validators_run_once_after_local_ones(self) -> None:
        f = Counted(_component(), "value")
        f.build(InputValue(1))
        f.verify(VERIFY_COMPONENT)
        self.assertEqual((1, 0), (Counted.calls, Counted.whole_tree_calls))
        f.verify(VERIFY_ALL)
        f.verify(VERIFY_ALL)
        self.assertEqual((1, 1), (Counted.calls, Counted.whole_tree_calls))

    def test_unknown_scope_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            Counted(_component(), "value").verify("everything")

    def test_error_uses_value_position_then_component_position(self) -> None:
        class Strict(Feature):
            error_class = RegisterMapError

            @build_action
            def _parse(self, value):
                pass

        record = Position("map.yaml", 1, 1)
        f = Strict(_component(record), "strict")
        with self.assertRaises(RegisterMapError) as exc:
            f.error("bad")
        self.assertEqual(record, exc.exception.position)

        value_pos = Position("map.yaml", 4, 9)
        f.build(InputValue("x", value_pos))
        with self.assertRaises(SourceError) as exc:
            f.error("bad")
        self.assertEqual("bad -- map.yaml:4:9", str(exc.exception))

        explicit = Position("other.yaml", 7)
        with self.assertRaises(RegisterMapError) as exc:
            f.error("bad", explicit)
        self.assertEqual(explicit, exc.exception.position)

    def test_error_is_declared_as_never_returning(self) -> None:
        self.assertIs(NoReturn, get_type_hints(Feature.error)["return"])


class TestInheritance(unittest.TestCase):
    def test_subclass_copies_declarations_without_leaking_back(self) -> None:
        class Base(Feature):
            size = Property()

            @build_action
            def _parse(self, value):
                self._size = value

        Base.input_pattern(r"\d+")

        class Child(Base):
            extra = Property(default="x")

        Base.define_property("late")
        Base.input_pattern(r"\w+")

        self.assertEqual(["size", "extra"], Child.properties())
        self.assertEqual(["size", "late"], Base.properties())
        self.assertFalse(hasattr(Child(_component(), "child"), "late"))
        self.assertIsNone(Base(_component(), "base").late)
        self.assertTrue(Child.active_feature())
        self.assertEqual(r"\A(?:\d+)\Z", Child.input_matcher._patterns[0].pattern)

        Child.add_validator(lambda self: None)
        self.assertEqual(0, len(Base._validators))
        self.assertEqual(1, len(Child._validators))

    def test_redefining_an_inherited_property_on_the_parent_keeps_the_child_copy(self) -> None:
        class Base(Feature):
            size = Property(default=1)

        class Child(Base):
            pass

        Base.define_property("size", default=2)

        self.assertEqual(2, Base(_component(), "base").size)
        self.assertEqual(1, Child(_component(), "child").size)

    def test_multiple_bases_are_merged(self) -> None:
        class Left(Feature):
            left = Property()

            @build_action
            def _left(self, value):
                self._left = value

        class Right(Feature):
            right = Property()

            @build_action
            def _right(self, value):
                self._right = value * 2

        class Both(Left, Right):
            pass

        f = Both(_component(), "both")
        f.build(InputValue(2))
        self.assertEqual((2, 4), (f.left, f.right))


if __name__ == "__main__":
    unittest.main()
