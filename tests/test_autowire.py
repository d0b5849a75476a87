from dataclasses import dataclass
from typing import Annotated

import pytest

from injectree.errors import InjectionError
from injectree.identifiers import identifier_for
from injectree.injector import Injector
from injectree.mappings import autowire


class Printer:
    def __init__(self):
        self.printed = []

    def print(self, line):
        self.printed.append(line)


@dataclass(frozen=True)
class Settings:
    greeting: str


@dataclass(frozen=True)
class Greeter:
    settings: Settings
    printer: Printer

    def greet(self, name):
        self.printer.print(f"{self.settings.greeting} {name}")


@pytest.fixture
def injector():
    injector = Injector(name="root")
    injector.register_value(identifier_for(Settings), Settings("Hello"))
    injector.register_singleton(identifier_for(Printer), autowire(Printer))
    return injector


def test_class_dependencies_are_resolved_by_type(injector):
    injector.register_mapping(identifier_for(Greeter), autowire(Greeter))

    greeter = injector.resolve(identifier_for(Greeter))
    greeter.greet("Arthur")

    assert injector.resolve(identifier_for(Printer)).printed == ["Hello Arthur"]


def test_annotated_parameters_use_qualified_identifier(injector):
    injector.register_value(identifier_for(str, "farewell"), "Goodbye")

    def make_message(farewell: Annotated[str, "farewell"], settings: Settings) -> str:
        return f"{settings.greeting} and {farewell}"

    assert autowire(make_message)(injector, "message") == "Hello and Goodbye"


def test_qualified_parameter_falls_back_to_wildcard(injector):
    injector.register_value(identifier_for(str), "plain")

    def make_message(text: Annotated[str, "missing"]) -> str:
        return text

    assert autowire(make_message)(injector, "message") == "plain"


def test_injector_parameter_receives_requesting_injector(injector):
    def make_scope_name(scope: Injector) -> str:
        return scope.name

    injector.register_mapping("scope", autowire(make_scope_name))

    assert injector.child(name="request").resolve("scope") == "request"


def test_unannotated_parameter_with_default_keeps_default(injector):
    def make_thing(settings: Settings, suffix="!") -> str:
        return settings.greeting + suffix

    assert autowire(make_thing)(injector, "thing") == "Hello!"


def test_unannotated_parameter_raises():
    def make_thing(untyped) -> str:
        return untyped

    with pytest.raises(InjectionError, match="Dependency 'untyped' of .*make_thing is not annotated"):
        autowire(make_thing)


def test_provides_registers_function_under_return_type(injector):
    @injector.provides()
    def make_greeter(settings: Settings, printer: Printer) -> Greeter:
        return Greeter(settings, printer)

    assert isinstance(injector.resolve(identifier_for(Greeter)), Greeter)


def test_provides_registers_class_under_its_own_identifier(injector):
    injector.provides()(Greeter)

    assert injector.resolve(identifier_for(Greeter)).settings == Settings("Hello")


def test_provides_singleton_caches_per_requesting_injector(injector):
    @injector.provides("greeter", singleton=True)
    def make_greeter(settings: Settings, printer: Printer) -> Greeter:
        return Greeter(settings, printer)

    child = injector.child()

    assert child.resolve("greeter") is child.resolve("greeter")
    assert injector.resolve("greeter") is injector.resolve("greeter")
    assert child.resolve("greeter") is not injector.resolve("greeter")


def test_descendants_created_after_owner_resolves_share_its_instance(injector):
    @injector.provides("greeter", singleton=True)
    def make_greeter(settings: Settings, printer: Printer) -> Greeter:
        return Greeter(settings, printer)

    owned = injector.resolve("greeter")
    child = injector.child()

    assert child.resolve("greeter") is owned
    assert child.child().resolve("greeter") is owned
    assert not child.table.exists("greeter")


def test_provides_returns_target_unchanged(injector):
    def make_settings() -> Settings:
        return Settings("Hi")

    assert injector.provides()(make_settings) is make_settings


def test_provides_without_identifier_or_return_type_raises(injector):
    with pytest.raises(InjectionError, match="does not have an annotated return type"):

        @injector.provides()
        def make_thing():
            pass
