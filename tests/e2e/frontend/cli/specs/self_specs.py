"""janusspec specs for janusspec itself."""

import asyncio
from types import SimpleNamespace

import click

from janusspec import test
from janusspec.adapters.reporters import ConsoleReporter
from janusspec.domain.rendering import render
from janusspec.domain.validators import deep_equal, exact
from janusspec.loader import load_spec_file

test(
    "load_spec_file() is a function",
    lambda t: t.expect(callable(load_spec_file)).to_be(True),
)

test(
    "exact() determines if 2 inputs are the same",
    lambda t: t.expect(exact("1", "1")).to_be(True),
)

test(
    "deep_equal() determines if 2 inputs are equal",
    lambda t: t.expect(deep_equal({"prop": "value"}, {"prop": "value"})).to_be(True),
)

test(
    "render() surrounds strings with quotes",
    lambda t: t.expect(render("hello")).to_be('"hello"'),
)

test(
    "render() can display objects",
    lambda t: t.expect(render({"prop": {"foo": "bar"}})).to_be('{"prop": {"foo": "bar"}}'),
)


@test("The console reporter writes through click")
def _(t):
    t.observe(click, "secho", False)
    ConsoleReporter().log_result([])
    t.expect(click.secho).to_have_been_called()


@test("Asynchronous actions can be performed inside specs")
def _(t):
    def continuation(done):
        def later():
            t.expect(200).to_be(200)
            done()

        asyncio.get_running_loop().call_later(0.05, later)

    t.async_(continuation)


@test("Observed functions do not have to call through to the actual function")
def _(t):
    state = {"value": 100}
    target = SimpleNamespace(change_value=lambda: state.update(value=200))

    t.observe(target, "change_value", False)
    target.change_value()

    t.expect(state["value"]).to_be(100)


@test("Observed functions know what they were called with")
def _(t):
    state = {"value": 100}
    target = SimpleNamespace(change_value_to=lambda v: state.update(value=v))

    t.observe(target, "change_value_to")
    target.change_value_to(200)

    t.expect(state["value"]).to_be(200)
    t.expect(target.change_value_to).to_have_been_called_with(200)
