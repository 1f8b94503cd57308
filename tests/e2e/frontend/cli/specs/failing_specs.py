"""Specs that fail in different ways."""

from janusspec import test

test("passes", lambda t: t.expect(1).to_be(1))
test("compares the wrong value", lambda t: t.expect([1, 2]).to_equal([1, 2, 3]))
test("asserts nothing", lambda t: None)
