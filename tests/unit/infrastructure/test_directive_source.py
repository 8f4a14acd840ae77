"""Unit tests for directive discovery and owner resolution."""

import functools
import sys

from aspect_logging.domain.directives import LogError, LogExecutionTime
from aspect_logging.infrastructure.directive_source import (
    AttributeDirectiveSource,
    DirectiveSlot,
    build_call_site,
    find_declaring_type,
    find_enclosing_type,
    resolve_owner,
    unwrap_member,
)


def _attach(target, kind, *directives):
    slot = DirectiveSlot(directives=directives)
    setattr(target, kind.attribute, slot)
    return slot


def _passthrough(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper


def report():
    pass


class Base:
    def run(self):
        pass


class Child(Base):
    pass


class Outer:
    class Inner:
        @staticmethod
        def make(value):
            return value


class TestAttributeDirectiveSource:
    """Tests for AttributeDirectiveSource."""

    def setup_method(self):
        self.source = AttributeDirectiveSource()

    def test_method_directives(self):
        def job():
            pass

        directive = LogExecutionTime(threshold_ms=5)
        _attach(job, LogExecutionTime, directive)

        assert self.source.method_directives(job, LogExecutionTime) == (directive,)
        assert self.source.method_directives(job, LogError) == ()

    def test_slot_copied_by_wraps(self):
        def job():
            pass

        slot = _attach(job, LogError, LogError())
        wrapped = _passthrough(job)

        assert getattr(wrapped, LogError.attribute) is slot
        assert self.source.method_directives(wrapped, LogError) == slot.directives

    def test_type_directives_not_inherited(self):
        class Parent:
            pass

        class Sub(Parent):
            pass

        _attach(Parent, LogError, LogError())

        assert len(self.source.type_directives(Parent, LogError)) == 1
        assert self.source.type_directives(Sub, LogError) == ()

    def test_module_owner_has_no_type_directives(self):
        module = sys.modules[__name__]
        assert self.source.type_directives(module, LogExecutionTime) == ()


class TestBuildCallSite:
    """Tests for build_call_site."""

    def test_collects_both_levels(self):
        class Owner:
            def work(self):
                pass

        method_timing = LogExecutionTime(threshold_ms=1)
        type_timing = LogExecutionTime(prefix="T ")
        type_error = LogError(level="SEVERE")
        _attach(Owner.work, LogExecutionTime, method_timing)
        _attach(Owner, LogExecutionTime, type_timing)
        _attach(Owner, LogError, type_error)

        site = build_call_site(AttributeDirectiveSource(), Owner.work, Owner, "work")

        assert site.owner is Owner
        assert site.method_name == "work"
        assert site.method_timing == (method_timing,)
        assert site.type_timing == (type_timing,)
        assert site.method_error is None
        assert site.type_error == type_error


class TestResolveOwner:
    """Tests for resolve_owner and find_declaring_type."""

    def test_module_function(self):
        slot = DirectiveSlot()

        owner = resolve_owner(slot, report, report, ())

        assert owner is sys.modules[__name__]
        assert slot.owner is owner

    def test_known_owner_short_circuits(self):
        slot = DirectiveSlot(owner=Base)
        assert resolve_owner(slot, report, report, ()) is Base

    def test_module_class_resolved_by_qualified_name(self):
        slot = DirectiveSlot()

        owner = resolve_owner(slot, Base.run, Base.run, (Child(),))

        assert owner is Base
        assert slot.owner is Base

    def test_static_method_owner_ignores_arguments(self):
        func = Outer.Inner.__dict__["make"].__func__
        first = DirectiveSlot()
        second = DirectiveSlot()

        assert resolve_owner(first, func, func, (3,)) is Outer.Inner
        assert resolve_owner(second, func, func, (Outer.Inner(),)) is Outer.Inner

    def test_enclosing_type(self):
        assert find_enclosing_type(Base.run) is Base
        assert find_enclosing_type(Outer.Inner.__dict__["make"].__func__) is Outer.Inner
        assert find_enclosing_type(report) is None

    def test_local_class_found_from_subclass_instance(self):
        class LocalBase:
            def run(self):
                pass

        class LocalChild(LocalBase):
            pass

        slot = DirectiveSlot()

        owner = resolve_owner(slot, LocalBase.run, LocalBase.run, (LocalChild(),))

        assert owner is LocalBase
        assert slot.owner is LocalBase

    def test_declaring_class_found_through_wrapper_chain(self):
        class Service:
            @_passthrough
            def call(self):
                pass

        inner = Service.__dict__["call"].__wrapped__
        assert find_declaring_type(inner, Service()) is Service

    def test_classmethod_first_argument_is_class(self):
        class Factory:
            @classmethod
            def build(cls):
                pass

        func = Factory.__dict__["build"].__func__
        assert find_declaring_type(func, Factory) is Factory

    def test_not_found(self):
        assert find_declaring_type(report, Child()) is None

    def test_unresolved_local_method_falls_back_to_module_uncached(self):
        class Local:
            def run(self):
                pass

        slot = DirectiveSlot()

        owner = resolve_owner(slot, Local.run, Local.run, (object(),))

        assert owner is sys.modules[__name__]
        assert slot.owner is None


class TestUnwrapMember:
    """Tests for unwrap_member."""

    def test_plain_function(self):
        assert unwrap_member(report) == [report]

    def test_static_and_class_methods(self):
        assert unwrap_member(staticmethod(report)) == [report]
        assert unwrap_member(classmethod(report)) == [report]

    def test_property(self):
        def getter(self):
            pass

        def setter(self, value):
            pass

        assert unwrap_member(property(getter, setter)) == [getter, setter]
